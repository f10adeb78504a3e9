import asyncio
import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from conftest import BASE_URL, PLANET_1
from core.errors import UpstreamStatusError
from mcp_server.server import SERVER_NAME, SERVER_VERSION, build_server


def _with_session(server, interact):
    async def scenario():
        async with create_connected_server_and_client_session(server) as session:
            return await interact(session)

    return asyncio.run(scenario())


def _text(result):
    return "".join(block.text for block in result.content)


@pytest.mark.unit
def test_initialization_options(swapi_client):
    options = build_server(swapi_client).create_initialization_options()
    assert options.server_name == SERVER_NAME
    assert options.server_version == SERVER_VERSION
    assert options.capabilities.tools is not None


@pytest.mark.unit
def test_ping(swapi_client):
    async def interact(session):
        return await session.send_ping()

    assert _with_session(build_server(swapi_client), interact) is not None


@pytest.mark.unit
def test_tools_list(swapi_client):
    async def interact(session):
        return await session.list_tools()

    tools = _with_session(build_server(swapi_client), interact).tools

    assert [t.name for t in tools] == ["search_character", "get_planet", "get_film"]
    assert tools[0].title == "Search Star Wars Character"
    assert tools[1].inputSchema["required"] == ["id"]


@pytest.mark.unit
def test_tools_call_success(swapi_client):
    async def interact(session):
        return await session.call_tool("get_planet", {"id": "1"})

    result = _with_session(build_server(swapi_client), interact)

    assert result.isError is False
    assert result.content[0].type == "text"
    assert json.loads(result.content[0].text) == PLANET_1
    assert swapi_client.requested == [f"{BASE_URL}/planets/1/"]


@pytest.mark.unit
def test_tools_call_unknown_tool(swapi_client):
    async def interact(session):
        return await session.call_tool("does_not_exist", {})

    result = _with_session(build_server(swapi_client), interact)

    assert result.isError is True
    assert "does_not_exist" in _text(result)
    assert swapi_client.requested == []


@pytest.mark.unit
def test_tools_call_bad_arguments(swapi_client):
    async def interact(session):
        return await session.call_tool("get_film", {"id": 4})

    result = _with_session(build_server(swapi_client), interact)

    assert result.isError is True
    assert swapi_client.requested == []


@pytest.mark.unit
def test_tools_call_upstream_failure_is_error_result(make_client):
    url = f"{BASE_URL}/planets/99/"
    client = make_client({url: UpstreamStatusError(url, 404)})

    async def interact(session):
        return await session.call_tool("get_planet", {"id": "99"})

    result = _with_session(build_server(client), interact)

    assert result.isError is True
    assert "HTTP 404" in _text(result)
    assert client.requested == [url]
