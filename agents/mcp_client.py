"""
Minimal MCP client for the SWAPI server.

Answers "where was <character> born and how tall are they?" by chaining
search_character and get_planet over streamable HTTP:

    python -m agents.mcp_client "Luke Skywalker" --url http://localhost:3000/mcp
"""

import argparse
import asyncio
import contextlib
import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from mcp import ClientSession, types
from mcp.client.streamable_http import streamablehttp_client

from core.logging_setup import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:3000/mcp"


class ToolCallError(RuntimeError):
    pass


@contextlib.asynccontextmanager
async def open_session(url: str = DEFAULT_URL, **transport_kwargs: Any) -> AsyncIterator[ClientSession]:
    """
    Connected, initialized session. Extra keyword arguments go to the
    streamable HTTP transport (e.g. httpx_client_factory).
    """
    async with streamablehttp_client(url, **transport_kwargs) as (read_stream, write_stream, _):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            yield session


async def list_tool_names(session: ClientSession) -> List[str]:
    result = await session.list_tools()
    return [tool.name for tool in result.tools]


async def call_json_tool(session: ClientSession, name: str, arguments: Dict[str, Any]) -> Any:
    result = await session.call_tool(name, arguments)
    text = "".join(
        block.text for block in result.content if isinstance(block, types.TextContent)
    )
    if result.isError:
        raise ToolCallError(f"{name} failed: {text}")
    return json.loads(text)


def _resource_id(url: str) -> str:
    # SWAPI links look like https://host/api/planets/1/
    return url.rstrip("/").rsplit("/", 1)[-1]


async def describe_character(session: ClientSession, name: str) -> Optional[str]:
    found = await call_json_tool(session, "search_character", {"name": name})
    results = found.get("results") or []
    if not results:
        return None

    character = results[0]
    planet = await call_json_tool(
        session,
        "get_planet",
        {"id": _resource_id(character["homeworld"])},
    )
    return (
        f"{character['name']} was born on {planet['name']} "
        f"and is {character['height']} cm tall."
    )


async def run(url: str, name: str) -> None:
    async with open_session(url) as session:
        logger.info("Tools available: %s", ", ".join(await list_tool_names(session)))
        answer = await describe_character(session, name)
    print(answer or f"No character named {name!r} found.")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Ask the SWAPI MCP server about a character.")
    parser.add_argument("name", nargs="?", default="Luke Skywalker")
    parser.add_argument("--url", default=DEFAULT_URL)
    args = parser.parse_args(argv)

    setup_logging()
    asyncio.run(run(args.url, args.name))


if __name__ == "__main__":
    main()
