import logging
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import INTERNAL_ERROR
from starlette.types import Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mcp", tags=["mcp"])

# JSON-RPC implementation-defined server error
METHOD_NOT_ALLOWED = -32000


def error_body(code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": None}


class StreamableHTTPEndpoint:
    """
    ASGI endpoint for POST /mcp.

    The session manager runs stateless: each request gets its own server
    session and transport, torn down when the response is sent.
    """

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.session_manager.handle_request(scope, receive, tracking_send)
        except Exception:
            logger.exception("Error handling MCP request")
            if response_started:
                return
            response = JSONResponse(
                status_code=500,
                content=error_body(INTERNAL_ERROR, "Internal server error"),
            )
            await response(scope, receive, send)


def _method_not_allowed() -> JSONResponse:
    # Stateless mode: no SSE stream to resume and no session to tear down.
    return JSONResponse(
        status_code=405,
        content=error_body(METHOD_NOT_ALLOWED, "Method not allowed."),
    )


@router.get("")
async def handle_mcp_get() -> Response:
    return _method_not_allowed()


@router.delete("")
async def handle_mcp_delete() -> Response:
    return _method_not_allowed()
