"""Tests for ToolInvoker."""

from __future__ import annotations

import asyncio

import pytest

from toolrpc.binding.context import RequestContext
from toolrpc.errors import RequestCancelledError
from toolrpc.registry.groups import ProviderGroup
from toolrpc.registry.models import RegisteredTool
from toolrpc.registry.registry import ToolRegistry
from toolrpc.rpc.invoker import ToolInvoker


def _tool(handler: object) -> RegisteredTool:
    group = ProviderGroup("Demo")
    group.add("demo", "", handler)  # type: ignore[arg-type]
    return ToolRegistry([group]).get("demo")


class TestToolInvoker:
    async def test_sync_result(self) -> None:
        def demo(value: int) -> int:
            return value * 2

        assert await ToolInvoker().invoke(_tool(demo), [21], RequestContext()) == 42

    async def test_async_result(self) -> None:
        async def demo(value: str) -> str:
            await asyncio.sleep(0)
            return value.upper()

        assert await ToolInvoker().invoke(_tool(demo), ["x"], RequestContext()) == "X"

    async def test_async_without_value(self) -> None:
        async def demo() -> None:
            await asyncio.sleep(0)

        assert await ToolInvoker().invoke(_tool(demo), [], RequestContext()) is None

    async def test_exceptions_propagate(self) -> None:
        async def demo() -> None:
            raise ValueError("bad geometry")

        with pytest.raises(ValueError, match="bad geometry"):
            await ToolInvoker().invoke(_tool(demo), [], RequestContext())

    async def test_already_cancelled_does_not_call_tool(self) -> None:
        called = []

        def demo() -> None:
            called.append(True)

        context = RequestContext()
        context.cancellation.cancel()
        with pytest.raises(RequestCancelledError):
            await ToolInvoker().invoke(_tool(demo), [], context)
        assert called == []

    async def test_cancellation_during_async_body(self) -> None:
        started = asyncio.Event()
        finished = []

        async def demo() -> None:
            started.set()
            await asyncio.sleep(10)
            finished.append(True)

        context = RequestContext()
        task = asyncio.create_task(ToolInvoker().invoke(_tool(demo), [], context))
        await started.wait()
        context.cancellation.cancel()

        with pytest.raises(RequestCancelledError) as exc_info:
            await task
        assert exc_info.value.data == "Request cancelled."
        assert finished == []

    async def test_body_cancelled_error_is_translated(self) -> None:
        async def demo() -> None:
            raise asyncio.CancelledError

        with pytest.raises(RequestCancelledError):
            await ToolInvoker().invoke(_tool(demo), [], RequestContext())
