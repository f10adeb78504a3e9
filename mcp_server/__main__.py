"""
Process entry point.

    python -m mcp_server                    # HTTP on $PORT and stdio
    python -m mcp_server --transport http
    python -m mcp_server --transport stdio
"""

import argparse
import asyncio
import contextlib
import logging
from typing import List, Optional

import uvicorn

from api.main import create_app
from core.config import Settings, get_settings
from core.logging_setup import setup_logging
from mcp_server.server import build_server
from mcp_server.stdio import serve_stdio

logger = logging.getLogger(__name__)

TRANSPORTS = ("both", "http", "stdio")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="swapi-mcp-server",
        description="Expose Star Wars API lookups as MCP tools.",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="both",
        help="which transport(s) to serve (default: both)",
    )
    return parser.parse_args(argv)


async def _serve_http(settings: Settings) -> None:
    config = uvicorn.Config(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    logger.info("HTTP MCP server running at http://localhost:%d/mcp", settings.port)
    await uvicorn.Server(config).serve()


async def run(transport: str, settings: Settings) -> None:
    stdio_task = None
    if transport in ("both", "stdio"):
        stdio_task = asyncio.create_task(serve_stdio(build_server()))

    if transport in ("both", "http"):
        await _serve_http(settings)
        # HTTP shutdown ends the process; stdin may never reach EOF.
        if stdio_task is not None:
            stdio_task.cancel()

    if stdio_task is not None:
        with contextlib.suppress(asyncio.CancelledError):
            await stdio_task


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        asyncio.run(run(args.transport, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
