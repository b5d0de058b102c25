"""Provider groups — the explicit tool registration table.

Each provider module declares one :class:`ProviderGroup` and registers its
tools on it, either with the decorator or with :meth:`ProviderGroup.add`::

    group = ProviderGroup("conversion", "Converts geometries.")

    @group.tool("conversion_wkt_to_geojson_get", "Converts WKT into GeoJSON.")
    async def wkt_to_geojson(client: GisServiceClient, wkt: str) -> str:
        ...

Nothing is discovered until a :class:`~toolrpc.registry.registry.ToolRegistry`
initializes; the group only records ``(name, description, parameters,
callable)`` entries.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from toolrpc.cancellation import CancellationToken
from toolrpc.errors import RegistryError
from toolrpc.registry.models import (
    ParameterDescriptor,
    ParameterKind,
    is_nullable,
    type_tag_for,
    unwrap_annotation,
)

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T", bound=type)

_INJECTABLE_ATTR = "__toolrpc_injectable__"


def injectable(cls: T) -> T:
    """Mark a class as a request-scoped service.

    Parameters annotated with an injectable class are resolved from the
    request's service scope and hidden from the published schema.
    """
    setattr(cls, _INJECTABLE_ATTR, True)
    return cls


def is_injectable(annotation: Any) -> bool:
    base = unwrap_annotation(annotation)
    return isinstance(base, type) and bool(getattr(base, _INJECTABLE_ATTR, False))


def describe_parameters(func: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
    """Adapt a callable's signature into parameter descriptors."""
    signature = inspect.signature(func)
    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as exc:
        msg = f"{func.__qualname__}: cannot resolve type hints: {exc}"
        raise RegistryError(msg) from exc

    params: list[ParameterDescriptor] = []
    for param in signature.parameters.values():
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            msg = f"{func.__qualname__}: parameter '{param.name}' must be positional"
            raise RegistryError(msg)

        annotation = hints.get(param.name, param.annotation)
        if annotation is inspect.Parameter.empty:
            annotation = Any
        has_default = param.default is not inspect.Parameter.empty

        params.append(
            ParameterDescriptor(
                name=param.name,
                type_tag=type_tag_for(annotation),
                is_optional=has_default or is_nullable(annotation),
                has_default=has_default,
                default=param.default if has_default else None,
                annotation=annotation,
                kind=_kind_for(annotation),
            )
        )
    return tuple(params)


def _kind_for(annotation: Any) -> ParameterKind:
    if unwrap_annotation(annotation) is CancellationToken:
        return ParameterKind.CANCELLATION
    if is_injectable(annotation):
        return ParameterKind.SERVICE
    return ParameterKind.ARGUMENT


@dataclass(frozen=True)
class ToolEntry:
    """One row of a group's registration table."""

    name: str
    description: str
    handler: Callable[..., Any]
    parameters: tuple[ParameterDescriptor, ...] | None = None


class ProviderGroup:
    """A named set of tools sharing a category and tags."""

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        category: str | None = None,
        tags: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.description = description
        self.category = category
        self.tags = tuple(tags)
        self._entries: list[ToolEntry] = []

    @property
    def entries(self) -> list[ToolEntry]:
        return list(self._entries)

    def tool(self, name: str | None = None, description: str = "") -> Callable[[F], F]:
        """Decorator form of :meth:`add`; returns the function unchanged."""

        def decorator(func: F) -> F:
            self.add(name or func.__name__, description, func)
            return func

        return decorator

    def add(
        self,
        name: str,
        description: str,
        handler: Callable[..., Any],
        parameters: Sequence[ParameterDescriptor] | None = None,
    ) -> None:
        """Record a tool; ``parameters`` defaults to the handler's signature."""
        if not callable(handler):
            msg = f"Tool '{name}' handler is not callable"
            raise RegistryError(msg)
        if not description:
            description = (inspect.getdoc(handler) or "").split("\n", 1)[0]
        self._entries.append(
            ToolEntry(
                name=name,
                description=description,
                handler=handler,
                parameters=tuple(parameters) if parameters is not None else None,
            )
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ProviderGroup({self.name!r}, tools={len(self._entries)})"
