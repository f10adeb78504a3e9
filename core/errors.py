from __future__ import annotations

from typing import Any, Dict, Optional


class MCPError(Exception):
    """
    Base error for the tool layer.

    message is always a non-empty, human readable string.
    details is always a dict (empty when there is nothing to add).
    """

    code: str = "mcp_error"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        safe_message = message.strip() if isinstance(message, str) else ""
        if not safe_message:
            safe_message = "Unknown tool error"
        super().__init__(safe_message)
        self.message = safe_message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


# -------- DISPATCH --------

class ToolNotFoundError(MCPError):
    code = "tool_not_found"

    def __init__(self, name: str):
        super().__init__(f"Tool {name} not found", details={"tool": name})
        self.name = name


class InvalidToolArgumentsError(MCPError):
    code = "invalid_arguments"


class DuplicateToolError(ValueError):
    pass


# -------- UPSTREAM --------

class UpstreamError(MCPError):
    code = "upstream_error"


class UpstreamConnectionError(UpstreamError):
    code = "upstream_connection"


class UpstreamStatusError(UpstreamError):
    code = "upstream_status"

    def __init__(self, url: str, status: int):
        super().__init__(
            f"SWAPI returned HTTP {status} for {url}",
            details={"url": url, "status": status},
        )
        self.url = url
        self.status = status


class UpstreamParseError(UpstreamError):
    code = "upstream_parse"
