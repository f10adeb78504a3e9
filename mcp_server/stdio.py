"""
Local-channel transport: MCP over stdin/stdout.

One long-lived server answers every message until stdin reaches EOF.
"""

import logging

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

logger = logging.getLogger(__name__)


async def serve_stdio(server: Server, stdin=None, stdout=None) -> None:
    """
    Serve until EOF. stdin/stdout default to the process streams; tests
    pass their own async line sources and sinks.
    """
    logger.info("stdio transport ready")
    async with stdio_server(stdin, stdout) as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
    logger.info("stdio transport closed")
