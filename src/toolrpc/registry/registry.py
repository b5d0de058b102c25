"""ToolRegistry — discovers tools from provider groups and answers lookups.

Discovery runs exactly once per registry version, lazily, under a mutex with
a fast unlocked re-check.  The result is an immutable snapshot that is
swapped in atomically, so readers never take the lock once initialized.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from toolrpc.errors import DuplicateToolError, ToolNotFoundError
from toolrpc.registry.aliases import AliasMap, build_alias_map
from toolrpc.registry.groups import ProviderGroup, describe_parameters
from toolrpc.registry.models import RegisteredTool, ToolDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    version: int
    tools: tuple[RegisteredTool, ...]
    public: tuple[ToolDescriptor, ...]
    by_name: dict[str, RegisteredTool] = field(default_factory=dict)
    by_qualified_name: dict[str, RegisteredTool] = field(default_factory=dict)


class Catalog(NamedTuple):
    """Descriptors and aliases taken from the same registry snapshot."""

    descriptors: list[ToolDescriptor]
    aliases: AliasMap


class ToolRegistry:
    """Maintains the canonical-name → tool map for a set of provider groups.

    Usage::

        registry = ToolRegistry([conversion.group, postal_codes.group])
        registry.list_descriptors()          # public schema snapshot
        tool = registry.lookup("MapList")    # alias, then canonical name

    Canonical names are unique case-insensitively; a duplicate is a fatal
    :class:`~toolrpc.errors.DuplicateToolError` at initialization.  With
    ``allow_qualified_names=True`` the registry also resolves
    ``Group.function`` names (legacy lookup mode).
    """

    def __init__(
        self,
        groups: Iterable[ProviderGroup] = (),
        *,
        allow_qualified_names: bool = False,
    ) -> None:
        self._groups: list[ProviderGroup] = list(groups)
        self._allow_qualified_names = allow_qualified_names
        self._lock = threading.Lock()
        self._version = 0
        self._snapshot: _Snapshot | None = None
        self._aliases: AliasMap | None = None

    @property
    def version(self) -> int:
        return self._version

    def add_group(self, group: ProviderGroup) -> None:
        """Add a provider group; the next query re-runs discovery."""
        with self._lock:
            self._groups.append(group)
            self._version += 1
            self._snapshot = None

    def ensure_initialized(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._discover()
            return self._snapshot

    def list_descriptors(self) -> list[ToolDescriptor]:
        """Return public descriptors (injected parameters filtered out)."""
        return list(self.ensure_initialized().public)

    def resolve(self, name: str) -> ToolDescriptor:
        """Look up a tool by canonical name (case-insensitive)."""
        return self.get(name).descriptor

    def get(self, name: str) -> RegisteredTool:
        snapshot = self.ensure_initialized()
        key = name.lower()
        tool = snapshot.by_name.get(key)
        if tool is None and self._allow_qualified_names:
            tool = snapshot.by_qualified_name.get(key)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def lookup(self, name: str) -> RegisteredTool:
        """Resolve a client-supplied name: alias first, then canonical."""
        canonical = self.alias_map().resolve(name)
        return self.get(canonical if canonical is not None else name)

    def alias_map(self, *, refresh: bool = False) -> AliasMap:
        """Return the cached alias map, rebuilding it when stale or asked to."""
        snapshot = self.ensure_initialized()
        aliases = self._aliases
        if not refresh and aliases is not None and aliases.version == snapshot.version:
            return aliases
        with self._lock:
            return self._rebuild_aliases(snapshot, force=refresh)

    def publish(self) -> Catalog:
        """Rebuild aliases and return them with the matching descriptors."""
        snapshot = self.ensure_initialized()
        with self._lock:
            aliases = self._rebuild_aliases(snapshot, force=True)
        return Catalog(list(snapshot.public), aliases)

    def _rebuild_aliases(self, snapshot: _Snapshot, *, force: bool) -> AliasMap:
        current = self._aliases
        if force or current is None or current.version != snapshot.version:
            current = build_alias_map(
                (tool.name for tool in snapshot.tools), version=snapshot.version
            )
            self._aliases = current
        return current

    def _discover(self) -> _Snapshot:
        tools: list[RegisteredTool] = []
        by_name: dict[str, RegisteredTool] = {}
        by_qualified_name: dict[str, RegisteredTool] = {}

        for group in self._groups:
            for entry in group.entries:
                parameters = entry.parameters
                if parameters is None:
                    parameters = describe_parameters(entry.handler)
                func_name = getattr(entry.handler, "__name__", entry.name)
                descriptor = ToolDescriptor(
                    name=entry.name,
                    qualified_name=f"{group.name}.{func_name}",
                    description=entry.description,
                    parameters=parameters,
                    category=group.category,
                    tags=group.tags,
                )
                tool = RegisteredTool(descriptor=descriptor, handler=entry.handler)

                key = descriptor.name.lower()
                existing = by_name.get(key)
                if existing is not None:
                    raise DuplicateToolError(
                        descriptor.name,
                        existing.descriptor.qualified_name,
                        descriptor.qualified_name,
                    )
                by_name[key] = tool
                by_qualified_name.setdefault(descriptor.qualified_name.lower(), tool)
                tools.append(tool)

        logger.debug(
            "Discovered %d tool(s) from %d provider group(s)", len(tools), len(self._groups)
        )
        return _Snapshot(
            version=self._version,
            tools=tuple(tools),
            public=tuple(tool.descriptor.public() for tool in tools),
            by_name=by_name,
            by_qualified_name=by_qualified_name,
        )
