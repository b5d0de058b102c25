"""JsonRpcDispatcher — parses envelopes, routes methods, and shapes responses.

Each request runs Receive → Parse → Validate → Route → Execute → Respond.
Batches are handled sequentially in array order, one response per element.
Every failure still yields a valid JSON-RPC response; only a body that is not
JSON at all is reported with HTTP status 400.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from toolrpc.binding.binder import ArgumentBinder
from toolrpc.binding.context import RequestContext
from toolrpc.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    RpcError,
    UpstreamError,
    UpstreamServiceError,
)
from toolrpc.registry.registry import ToolRegistry
from toolrpc.rpc.formatter import format_tool_result
from toolrpc.rpc.invoker import ToolInvoker
from toolrpc.rpc.models import (
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    ToolCallResult,
    ToolSchema,
    extract_id,
)
from toolrpc.utils.telemetry import (
    ATTR_BATCH_SIZE,
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_PROTOCOL_VERSION = "2025-05-01"
DEFAULT_INSTRUCTIONS = "Connected to the toolrpc server. Use tools/list then tools/invoke."
TOOL_INVOKE_METHODS = ("tools/invoke", "tool/invoke", "tool/call", "tools/call")

Handler = Callable[[JsonRpcRequest, RequestContext], Awaitable[Any]]


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON.
    msg = f"Invalid JSON constant: {name}"
    raise ValueError(msg)


@dataclass(frozen=True)
class DispatchResult:
    """Response payload plus the HTTP status a transport should use."""

    payload: Any
    status_code: int = 200


class JsonRpcDispatcher:
    """Routes JSON-RPC 2.0 requests to built-in methods and registered tools.

    Usage::

        dispatcher = JsonRpcDispatcher(registry)
        result = await dispatcher.dispatch_raw(body, context)
        # result.payload is a dict, a list (batch), or {} for a bare ``exit``
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        binder: ArgumentBinder | None = None,
        invoker: ToolInvoker | None = None,
        server_info: ServerInfo | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        instructions: str = DEFAULT_INSTRUCTIONS,
    ) -> None:
        self._registry = registry
        self._binder = binder or ArgumentBinder()
        self._invoker = invoker or ToolInvoker()
        self._server_info = server_info or ServerInfo()
        self._protocol_version = protocol_version
        self._instructions = instructions
        self._routes: dict[str, Handler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "shutdown": self._shutdown,
            "tools/list": self._list_tools,
        }
        for method in TOOL_INVOKE_METHODS:
            self._routes[method] = self._invoke_tool

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def dispatch_raw(
        self,
        body: bytes | str,
        context: RequestContext | None = None,
    ) -> DispatchResult:
        """Parse a raw body and dispatch it."""
        try:
            value = json.loads(body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            logger.debug("Rejecting unparseable request body: %s", exc)
            error = JsonRpcResponse.failure(None, ParseError(str(exc)))
            return DispatchResult(error.to_wire(), status_code=400)
        return DispatchResult(await self.dispatch(value, context))

    async def dispatch(self, value: Any, context: RequestContext | None = None) -> Any:
        """Dispatch an already-decoded single request or batch."""
        context = context or RequestContext()
        if isinstance(value, list):
            with _tracer.start_as_current_span("toolrpc.rpc.batch") as span:
                span.set_attribute(ATTR_BATCH_SIZE, len(value))
                return [await self.handle(item, context) for item in value]
        return await self.handle(value, context)

    async def handle(self, envelope: Any, context: RequestContext) -> dict[str, Any]:
        """Validate and execute one envelope; never raises for request errors."""
        if not isinstance(envelope, dict):
            return self._failure(
                None, ProtocolError("Payload must be an object or batch array.")
            )

        request_id = extract_id(envelope)
        if envelope.get("jsonrpc") != "2.0":
            return self._failure(request_id, ProtocolError("Missing or invalid jsonrpc version."))

        method = envelope.get("method")
        if not isinstance(method, str):
            return self._failure(request_id, ProtocolError("Missing method."))

        request = JsonRpcRequest(method=method, id=request_id, params=envelope.get("params"))

        with _tracer.start_as_current_span("toolrpc.rpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, method)
            response = await self._execute(request, context)
            error = response.get("error")
            if error is not None:
                span.set_attribute(ATTR_RPC_ERROR_CODE, error["code"])
            return response

    async def _execute(self, request: JsonRpcRequest, context: RequestContext) -> dict[str, Any]:
        if request.method == "exit":
            # Fire-and-forget: no envelope without an id.
            if request.id is None:
                return {}
            return JsonRpcResponse.success(request.id, {}).to_wire()

        handler = self._routes.get(request.method)
        try:
            if handler is None:
                raise MethodNotFoundError(request.method)
            result = await handler(request, context)
        except RpcError as exc:
            return self._failure(request.id, exc)
        except UpstreamServiceError as exc:
            logger.warning("Upstream service failure in %s: %s", request.method, exc)
            return self._failure(
                request.id, UpstreamError(str(exc), unauthorized=exc.unauthorized)
            )
        except Exception as exc:
            logger.exception("Unhandled error while executing %s", request.method)
            return self._failure(request.id, InternalError(str(exc)))
        return JsonRpcResponse.success(request.id, result).to_wire()

    @staticmethod
    def _failure(request_id: Any, exc: RpcError) -> dict[str, Any]:
        return JsonRpcResponse.failure(request_id, exc).to_wire()

    # ------------------------------------------------------------------
    # Built-in methods
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest, context: RequestContext) -> Any:
        protocol_version = self._protocol_version
        params = request.params
        if isinstance(params, dict) and isinstance(params.get("protocolVersion"), str):
            protocol_version = params["protocolVersion"]

        server_info = self._server_info.model_dump()
        return {
            "protocolVersion": protocol_version,
            "serverInfo": server_info,
            "server": server_info,
            "capabilities": {"tools": {}},
            "instructions": self._instructions,
        }

    async def _ping(self, request: JsonRpcRequest, context: RequestContext) -> Any:
        return {"pong": True, "timestamp": datetime.now(UTC).isoformat()}

    async def _shutdown(self, request: JsonRpcRequest, context: RequestContext) -> Any:
        return {}

    async def _list_tools(self, request: JsonRpcRequest, context: RequestContext) -> Any:
        catalog = self._registry.publish()
        tools = [
            ToolSchema.from_descriptor(descriptor, catalog.aliases.alias_for(descriptor.name))
            for descriptor in catalog.descriptors
        ]
        return {"tools": [tool.to_wire() for tool in tools]}

    async def _invoke_tool(self, request: JsonRpcRequest, context: RequestContext) -> Any:
        params = request.params
        if not isinstance(params, dict):
            raise InvalidParamsError("Expected object for params.")

        name = params.get("name")
        if not isinstance(name, str):
            raise InvalidParamsError("Missing 'name'.")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise InvalidParamsError("Expected object for 'arguments'.")

        tool = self._registry.lookup(name)
        args = self._binder.bind(tool, arguments, context)
        value = await self._invoker.invoke(tool, args, context)
        return ToolCallResult(content=format_tool_result(value)).to_wire()
