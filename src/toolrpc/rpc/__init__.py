"""JSON-RPC layer — envelopes, dispatcher, invoker, and result formatting."""

from toolrpc.rpc.dispatcher import (
    DEFAULT_PROTOCOL_VERSION,
    TOOL_INVOKE_METHODS,
    DispatchResult,
    JsonRpcDispatcher,
)
from toolrpc.rpc.formatter import format_tool_result
from toolrpc.rpc.invoker import ToolInvoker
from toolrpc.rpc.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    TextContent,
    ToolCallResult,
    ToolSchema,
)

__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "TOOL_INVOKE_METHODS",
    "DispatchResult",
    "JsonRpcDispatcher",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ServerInfo",
    "TextContent",
    "ToolCallResult",
    "ToolInvoker",
    "ToolSchema",
    "format_tool_result",
]
