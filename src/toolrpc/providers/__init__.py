"""Bundled tool providers for the GISBlox web services.

:func:`default_groups` is the registration table the server starts from.
"""

from __future__ import annotations

from toolrpc.providers import (
    conversion,
    info,
    map_analytics,
    postal_codes,
    projection,
    visualization,
)
from toolrpc.registry.groups import ProviderGroup
from toolrpc.registry.registry import ToolRegistry


def default_groups() -> list[ProviderGroup]:
    return [
        info.group,
        conversion.group,
        postal_codes.group,
        projection.group,
        visualization.group,
        map_analytics.group,
    ]


def create_registry(*, allow_qualified_names: bool = False) -> ToolRegistry:
    """Build a registry over :func:`default_groups`."""
    return ToolRegistry(default_groups(), allow_qualified_names=allow_qualified_names)
