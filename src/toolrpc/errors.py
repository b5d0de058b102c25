"""Shared error types — JSON-RPC error taxonomy and registry startup failures.

Every :class:`RpcError` carries the JSON-RPC ``code``, a short ``message`` and
optional ``data``.  The dispatcher turns them into error envelopes verbatim;
anything else raised by a tool body is translated at the dispatch boundary.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Standard JSON-RPC 2.0 codes
# ---------------------------------------------------------------------------

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Reserved for translated upstream-service failures.
UPSTREAM_UNAUTHORIZED = -32000
UPSTREAM_FAILURE = -32001


class RpcError(Exception):
    """Base error for everything that maps onto a JSON-RPC error object."""

    code: int = INTERNAL_ERROR
    default_message: str = "Internal error"

    def __init__(self, data: Any = None, *, message: str | None = None) -> None:
        self.message = message or self.default_message
        self.data = data
        detail = f": {data}" if data is not None else ""
        super().__init__(f"{self.message}{detail}")

    def to_error(self) -> dict[str, Any]:
        """Return the wire ``error`` member; ``data`` is omitted when null."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class ParseError(RpcError):
    """The request body is not valid JSON."""

    code = PARSE_ERROR
    default_message = "Parse error"


class ProtocolError(RpcError):
    """Malformed envelope: not JSON-RPC 2.0, not an object, or missing method."""

    code = INVALID_REQUEST
    default_message = "Invalid Request"


class NotFoundError(RpcError):
    """Unknown method or unresolvable tool name."""

    code = METHOD_NOT_FOUND
    default_message = "Method not found"


class MethodNotFoundError(NotFoundError):
    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(method)


class ToolNotFoundError(NotFoundError):
    """Requested tool does not exist in the registry."""

    default_message = "Tool not found"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)


class InvalidParamsError(RpcError):
    """Missing or malformed arguments, including parameter coercion failures."""

    code = INVALID_PARAMS
    default_message = "Invalid params"

    def __init__(self, detail: str, *, parameter: str | None = None) -> None:
        self.parameter = parameter
        message = f"Invalid params: '{parameter}'" if parameter else None
        super().__init__(detail, message=message)


class InternalError(RpcError):
    """Uncaught tool-body failure or invocation failure."""

    code = INTERNAL_ERROR
    default_message = "Internal error"


class RequestCancelledError(InternalError):
    """The request's cancellation token fired while a tool was running."""

    def __init__(self) -> None:
        super().__init__("Request cancelled.")


class UpstreamError(RpcError):
    """A recognized external-service failure, split by category."""

    def __init__(self, detail: str, *, unauthorized: bool = False) -> None:
        self.unauthorized = unauthorized
        if unauthorized:
            self.code = UPSTREAM_UNAUTHORIZED
            message = "Service authorization failed (invalid service token)"
        else:
            self.code = UPSTREAM_FAILURE
            message = "Service API error"
        super().__init__(detail, message=message)


class UpstreamServiceError(Exception):
    """Raised by external-service clients; translated into :class:`UpstreamError`."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def unauthorized(self) -> bool:
        if self.status_code in (401, 403):
            return True
        return "unauthorized" in str(self).lower()


# ---------------------------------------------------------------------------
# Startup / configuration errors (never reach the wire)
# ---------------------------------------------------------------------------


class RegistryError(Exception):
    """Base error for tool registration failures."""


class DuplicateToolError(RegistryError):
    """Two providers declared the same canonical tool name."""

    def __init__(self, name: str, first: str, second: str) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(f"Duplicate tool name '{name}' declared by {first} and {second}")


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""
