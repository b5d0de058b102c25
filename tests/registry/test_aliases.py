"""Tests for wire-safe alias generation."""

from __future__ import annotations

import re

from toolrpc.registry.aliases import (
    DEFAULT_ALIAS,
    MAX_ALIAS_LENGTH,
    build_alias_map,
    sanitize_tool_name,
)

_SAFE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class TestSanitizeToolName:
    def test_keeps_safe_names(self) -> None:
        assert sanitize_tool_name("conversion_wkt_to_geojson_get") == "conversion_wkt_to_geojson_get"

    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_tool_name("Postal.Codes get/4") == "Postal_Codes_get_4"

    def test_empty_becomes_default(self) -> None:
        assert sanitize_tool_name("") == DEFAULT_ALIAS

    def test_truncates_long_names(self) -> None:
        assert sanitize_tool_name("x" * 100) == "x" * MAX_ALIAS_LENGTH

    def test_unicode_is_replaced(self) -> None:
        alias = sanitize_tool_name("straße")
        assert _SAFE.match(alias)
        assert alias == "stra_e"


class TestBuildAliasMap:
    def test_bijection(self) -> None:
        names = ["MapList", "map.list", "map list", "Map/List", "GetPostalCode4Record"]
        aliases = build_alias_map(names)

        assert len(aliases) == len(names)
        seen = set()
        for name in names:
            alias = aliases.alias_for(name)
            assert _SAFE.match(alias)
            assert aliases.resolve(alias) == name
            seen.add(alias.lower())
        assert len(seen) == len(names)

    def test_collision_gets_suffix(self) -> None:
        aliases = build_alias_map(["a.b", "a b", "a/b"])
        assert aliases.alias_for("a.b") == "a_b"
        assert aliases.alias_for("a b") == "a_b_2"
        assert aliases.alias_for("a/b") == "a_b_3"

    def test_long_collision_keeps_suffix_within_bound(self) -> None:
        first = "a" * 64
        second = "a" * 63 + "."
        third = "a" * 64 + "!"
        aliases = build_alias_map([first, second, third])

        assert aliases.alias_for(first) == first
        assert aliases.alias_for(second) == "a" * 63 + "_"
        colliding = aliases.alias_for(third)
        assert len(colliding) <= MAX_ALIAS_LENGTH
        assert colliding.endswith("_2")
        assert aliases.resolve(colliding) == third

    def test_resolve_is_case_insensitive(self) -> None:
        aliases = build_alias_map(["MapKpisGet"])
        assert aliases.resolve("mapkpisget") == "MapKpisGet"
        assert "MAPKPISGET" in aliases

    def test_case_only_collision_is_suffixed(self) -> None:
        aliases = build_alias_map(["tool.x", "TOOL_X"])
        assert aliases.alias_for("tool.x") == "tool_x"
        assert aliases.alias_for("TOOL_X") == "TOOL_X_2"

    def test_unknown_alias(self) -> None:
        assert build_alias_map(["a"]).resolve("b") is None

    def test_version_is_kept(self) -> None:
        assert build_alias_map(["a"], version=3).version == 3
