"""Wire models — JSON-RPC 2.0 envelopes and tool payloads.

Request envelopes are validated by hand in the dispatcher (so that the exact
``-32600`` reasons can be reported) and then frozen into
:class:`JsonRpcRequest` for routing.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from toolrpc import __version__
from toolrpc.errors import RpcError
from toolrpc.registry.models import ToolDescriptor

RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A validated JSON-RPC 2.0 request."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: RequestId = None
    params: Any = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    result: Any = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, exc: RpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError.model_validate(exc.to_error()))

    def to_wire(self) -> dict[str, Any]:
        """Serialize with exactly one of ``result``/``error``; ``id`` is always present."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result
        return wire


def extract_id(envelope: dict[str, Any]) -> RequestId:
    """Return the envelope id, or ``None`` for anything that is not a valid id."""
    value = envelope.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


# ---------------------------------------------------------------------------
# Tool payloads
# ---------------------------------------------------------------------------


class ServerInfo(BaseModel):
    """Server identity reported by ``initialize``."""

    name: str = "toolrpc"
    version: str = __version__
    description: str = "toolrpc tool server"


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result payload of ``tools/invoke``."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    is_error: bool = Field(default=False, alias="isError")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolSchema(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")
    category: str | None = None
    tags: list[str] | None = None

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, alias: str) -> ToolSchema:
        return cls(
            name=alias,
            description=descriptor.description or "",
            input_schema=descriptor.input_schema(),
            category=descriptor.category or None,
            tags=list(descriptor.tags) or None,
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
