import contextlib
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mcp.server.lowlevel import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from api.mcp import StreamableHTTPEndpoint, router as mcp_router
from mcp_server.server import build_server

SESSION_HEADER = "mcp-session-id"


def create_app(server_factory: Callable[[], Server] = build_server) -> FastAPI:
    # A session manager can only be run once, so every app gets its own.
    session_manager = StreamableHTTPSessionManager(
        app=server_factory(),
        json_response=True,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        async with session_manager.run():
            yield

    app = FastAPI(title="SWAPI MCP Server", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=[SESSION_HEADER, "content-type"],
        expose_headers=[SESSION_HEADER],
    )
    app.add_route(
        "/mcp",
        StreamableHTTPEndpoint(session_manager),
        methods=["POST"],
        include_in_schema=False,
    )
    app.include_router(mcp_router)
    return app


app = create_app()
