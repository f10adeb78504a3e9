import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import Server

from core.config import get_settings
from core.errors import ToolNotFoundError, UpstreamError
from core.swapi import SwapiClient
from mcp_server.tools import ToolRegistry, build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "swapi-mcp-server"
SERVER_VERSION = "1.0.0"


class MCPServer:
    """
    MCP logical server.

    Owns one tool registry and nothing else: every dispatch is independent.
    The wire protocol lives in the SDK server returned by
    to_protocol_server(); this class only resolves and invokes tools.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> List[types.Tool]:
        return [tool.schema() for tool in self.registry.list_tools()]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
    ) -> types.CallToolResult:
        tool = self.registry.lookup(name)
        if tool is None:
            raise ToolNotFoundError(name)

        validated = tool.validate_arguments(arguments)
        logger.info("Tool %s called with %s", name, validated)
        try:
            result = await tool.handler(validated)
        except UpstreamError as exc:
            logger.warning("Tool %s failed: %s", name, exc.message)
            raise
        logger.info("Tool %s returned %d content block(s)", name, len(result.content))
        return result

    def to_protocol_server(self) -> Server:
        """
        Wrap this dispatcher in an SDK server.

        Exceptions raised by call_tool (unknown tool, bad arguments,
        upstream failure) are reported by the SDK as a tool result with
        isError set and the exception message as text.
        """
        server = Server(SERVER_NAME, version=SERVER_VERSION)

        @server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return self.list_tools()

        @server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
            result = await self.call_tool(name, arguments)
            return list(result.content)

        return server


def build_dispatcher(client: Optional[SwapiClient] = None) -> MCPServer:
    """Fresh registry + dispatcher pair. No I/O happens here."""
    if client is None:
        settings = get_settings()
        client = SwapiClient(
            base_url=settings.swapi_base_url,
            timeout=settings.swapi_timeout,
        )
    return MCPServer(build_registry(client))


def build_server(client: Optional[SwapiClient] = None) -> Server:
    return build_dispatcher(client).to_protocol_server()
