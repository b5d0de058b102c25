"""Tests for ServiceCollection and ServiceScope."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from toolrpc.binding.services import ServiceCollection, ServiceScope


class _Client:
    def __init__(self, key: str = "") -> None:
        self.key = key
        self.aclose = AsyncMock()


class _Sync:
    def __init__(self) -> None:
        self.close = MagicMock()


class TestServiceScope:
    def test_resolve_unregistered_returns_none(self) -> None:
        scope = ServiceScope()
        assert scope.resolve(_Client) is None
        assert scope.resolve(str) is None
        assert scope.resolve(list[int]) is None

    def test_scoped_factory_called_once_per_scope(self) -> None:
        factory = MagicMock(side_effect=lambda scope: _Client(scope.items["key"]))
        services = ServiceCollection()
        services.add_scoped(_Client, factory)

        scope = services.create_scope({"key": "abc"})
        first = scope.resolve(_Client)
        assert scope.resolve(_Client | None) is first
        assert first.key == "abc"
        assert factory.call_count == 1

        other = services.create_scope({"key": "xyz"}).resolve(_Client)
        assert other is not first
        assert factory.call_count == 2

    def test_instances_are_shared(self) -> None:
        client = _Client()
        services = ServiceCollection()
        services.add_instance(_Client, client)
        assert _Client in services
        assert services.create_scope().resolve(_Client) is client
        assert services.create_scope().resolve(_Client) is client

    async def test_aclose_closes_scoped_services(self) -> None:
        services = ServiceCollection()
        services.add_scoped(_Client, lambda scope: _Client())
        services.add_scoped(_Sync, lambda scope: _Sync())
        scope = services.create_scope()
        client = scope.resolve(_Client)
        sync = scope.resolve(_Sync)

        await scope.aclose()
        client.aclose.assert_awaited_once()
        sync.close.assert_called_once()

    async def test_aclose_leaves_shared_instances_open(self) -> None:
        client = _Client()
        services = ServiceCollection()
        services.add_instance(_Client, client)
        scope = services.create_scope()
        scope.resolve(_Client)

        await scope.aclose()
        client.aclose.assert_not_awaited()

    async def test_aclose_logs_and_continues_on_failure(self) -> None:
        services = ServiceCollection()
        failing = _Client()
        failing.aclose = AsyncMock(side_effect=RuntimeError("boom"))
        services.add_scoped(_Client, lambda scope: failing)
        services.add_scoped(_Sync, lambda scope: _Sync())
        scope = services.create_scope()
        scope.resolve(_Client)
        sync = scope.resolve(_Sync)

        await scope.aclose()
        sync.close.assert_called_once()
