"""ToolInvoker — runs a bound tool and unwraps its result.

Every handler result goes through one awaitable path: synchronous values are
wrapped in a completed coroutine, coroutines and futures are scheduled as a
task and raced against the request's cancellation token.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from toolrpc.binding.context import RequestContext
from toolrpc.cancellation import CancellationToken
from toolrpc.errors import RequestCancelledError
from toolrpc.registry.models import RegisteredTool
from toolrpc.utils.telemetry import ATTR_TOOL_NAME, ATTR_TOOL_QUALIFIED_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


async def _completed(value: Any) -> Any:
    return value


class ToolInvoker:
    """Executes tools; domain exceptions propagate to the caller."""

    async def invoke(
        self,
        tool: RegisteredTool,
        args: Sequence[Any],
        context: RequestContext,
    ) -> Any:
        with _tracer.start_as_current_span("toolrpc.tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool.descriptor.name)
            span.set_attribute(ATTR_TOOL_QUALIFIED_NAME, tool.descriptor.qualified_name)

            context.cancellation.raise_if_cancelled()
            result = tool.handler(*args)
            awaitable: Awaitable[Any] = (
                result if inspect.isawaitable(result) else _completed(result)
            )
            return await self._run(awaitable, context.cancellation)

    @staticmethod
    async def _run(awaitable: Awaitable[Any], token: CancellationToken) -> Any:
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(token.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            try:
                return task.result()
            except asyncio.CancelledError as exc:
                raise RequestCancelledError() from exc

        logger.info("Request cancelled while tool was running")
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise RequestCancelledError()
