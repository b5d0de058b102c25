"""Wire-safe tool aliases.

Clients restrict tool names to ``[A-Za-z0-9_-]{1,64}``.  Canonical names are
sanitized into aliases; collisions get a numeric suffix (``_2``, ``_3``, ...)
and the base is trimmed so the suffix always survives the 64-character bound.
Lookups are case-insensitive.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

MAX_ALIAS_LENGTH = 64
DEFAULT_ALIAS = "tool"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_tool_name(value: str) -> str:
    """Replace unsafe characters with ``_`` and bound the length."""
    sanitized = _UNSAFE_CHARS.sub("_", value)
    if not sanitized:
        sanitized = DEFAULT_ALIAS
    return sanitized[:MAX_ALIAS_LENGTH]


def _with_suffix(base: str, index: int) -> str:
    suffix = f"_{index}"
    if len(base) + len(suffix) > MAX_ALIAS_LENGTH:
        base = base[: max(1, MAX_ALIAS_LENGTH - len(suffix))]
    return base + suffix


class AliasMap:
    """Immutable alias → canonical-name mapping for one registry version."""

    def __init__(self, aliases: dict[str, str], *, version: int = 0) -> None:
        self._aliases = dict(aliases)
        self._lookup = {alias.lower(): canonical for alias, canonical in aliases.items()}
        self._by_canonical = {canonical.lower(): alias for alias, canonical in aliases.items()}
        self.version = version

    def resolve(self, name: str) -> str | None:
        """Return the canonical name behind *name*, or ``None``."""
        return self._lookup.get(name.lower())

    def alias_for(self, canonical: str) -> str:
        return self._by_canonical[canonical.lower()]

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._aliases.items())

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lookup


def build_alias_map(names: Iterable[str], *, version: int = 0) -> AliasMap:
    """Assign a unique alias to every canonical name, in order."""
    used: set[str] = set()
    aliases: dict[str, str] = {}
    for canonical in names:
        alias = sanitize_tool_name(canonical)
        index = 2
        while alias.lower() in used:
            alias = _with_suffix(sanitize_tool_name(canonical), index)
            index += 1
        used.add(alias.lower())
        aliases[alias] = canonical
    return AliasMap(aliases, version=version)
