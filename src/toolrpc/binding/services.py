"""Service collection and per-request scopes.

A :class:`ServiceCollection` maps service types to factories.  Every inbound
request opens a :class:`ServiceScope` from it; the scope builds each service
at most once and closes what it built when the request ends.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from toolrpc.registry.models import unwrap_annotation

logger = logging.getLogger(__name__)

Factory = Callable[["ServiceScope"], Any]


class ServiceCollection:
    """Type → factory table shared by all requests."""

    def __init__(self) -> None:
        self._factories: dict[type, Factory] = {}

    def add_instance(self, service_type: type, instance: Any) -> None:
        """Register a singleton; scopes never close it."""
        self._factories[service_type] = _Shared(instance)

    def add_scoped(self, service_type: type, factory: Factory) -> None:
        """Register a factory called once per request scope."""
        self._factories[service_type] = factory

    def factory_for(self, service_type: type) -> Factory | None:
        return self._factories.get(service_type)

    def create_scope(self, items: Mapping[str, Any] | None = None) -> ServiceScope:
        return ServiceScope(self, items)

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._factories


class ServiceScope:
    """Resolves services for a single request.

    ``items`` carries request data factories may need, e.g. ``headers``.
    """

    def __init__(
        self,
        collection: ServiceCollection | None = None,
        items: Mapping[str, Any] | None = None,
    ) -> None:
        self._collection = collection or ServiceCollection()
        self.items: dict[str, Any] = dict(items or {})
        self._instances: dict[type, Any] = {}
        self._owned: list[Any] = []

    def resolve(self, annotation: Any) -> Any | None:
        """Return the service registered for *annotation*, or ``None``."""
        service_type = unwrap_annotation(annotation)
        if not isinstance(service_type, type):
            return None
        if service_type in self._instances:
            return self._instances[service_type]

        factory = self._collection.factory_for(service_type)
        if factory is None:
            return None
        if isinstance(factory, _Shared):
            instance = factory.instance
        else:
            instance = factory(self)
            if instance is not None:
                self._owned.append(instance)
        self._instances[service_type] = instance
        return instance

    async def aclose(self) -> None:
        """Close every scoped service that exposes ``aclose`` or ``close``."""
        owned, self._owned = self._owned, []
        self._instances.clear()
        for instance in reversed(owned):
            closer = getattr(instance, "aclose", None) or getattr(instance, "close", None)
            if closer is None:
                continue
            try:
                result = closer()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Failed to close scoped service %r", instance)


class _Shared:
    __slots__ = ("instance",)

    def __init__(self, instance: Any) -> None:
        self.instance = instance

    def __call__(self, scope: ServiceScope) -> Any:
        return self.instance
