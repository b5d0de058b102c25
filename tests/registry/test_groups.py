"""Tests for ProviderGroup registration and signature adaptation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from pydantic import BaseModel

from toolrpc.cancellation import CancellationToken
from toolrpc.errors import RegistryError
from toolrpc.registry.groups import ProviderGroup, describe_parameters, injectable, is_injectable
from toolrpc.registry.models import ParameterKind, TypeTag
from toolrpc.registry.registry import ToolRegistry

if TYPE_CHECKING:
    from toolrpc.services.client import GisServiceClient


@injectable
class _Client:
    pass


class _Point(BaseModel):
    x: float
    y: float


class TestDescribeParameters:
    def test_unresolvable_hint_is_rejected(self) -> None:
        def tool(client: GisServiceClient, wkt: str) -> str:
            return wkt

        with pytest.raises(RegistryError, match="cannot resolve type hints"):
            describe_parameters(tool)

    def test_unresolvable_hint_fails_registry_initialization(self) -> None:
        group = ProviderGroup("Broken")

        @group.tool("conversion_wkt_to_geojson_get")
        async def convert(client: GisServiceClient, wkt: str) -> str:
            return wkt

        with pytest.raises(RegistryError, match="convert"):
            ToolRegistry([group]).list_descriptors()

    def test_kinds_and_tags(self) -> None:
        def tool(
            client: _Client,
            wkt: str,
            count: int,
            ratio: float,
            flag: bool,
            point: _Point,
            items: list[str],
            cancellation: CancellationToken,
        ) -> None: ...

        params = {p.name: p for p in describe_parameters(tool)}
        assert params["client"].kind is ParameterKind.SERVICE
        assert params["cancellation"].kind is ParameterKind.CANCELLATION
        assert params["wkt"].type_tag is TypeTag.STRING
        assert params["count"].type_tag is TypeTag.INTEGER
        assert params["ratio"].type_tag is TypeTag.NUMBER
        assert params["flag"].type_tag is TypeTag.BOOLEAN
        assert params["point"].type_tag is TypeTag.OBJECT
        assert params["items"].type_tag is TypeTag.ARRAY

    def test_optional_and_defaults(self) -> None:
        def tool(a: str, b: int = 3, c: str | None = None) -> None: ...

        params = {p.name: p for p in describe_parameters(tool)}
        assert params["a"].required
        assert params["b"].has_default and params["b"].default == 3
        assert params["c"].is_optional
        assert not params["a"].is_optional

    def test_nullable_without_default_is_optional(self) -> None:
        def tool(a: str | None) -> None: ...

        (param,) = describe_parameters(tool)
        assert param.is_optional
        assert not param.has_default
        assert not param.required

    def test_optional_cancellation_is_still_cancellation(self) -> None:
        def tool(cancellation: CancellationToken | None = None) -> None: ...

        (param,) = describe_parameters(tool)
        assert param.kind is ParameterKind.CANCELLATION

    def test_unannotated_is_any(self) -> None:
        def tool(value) -> None: ...  # type: ignore[no-untyped-def]

        (param,) = describe_parameters(tool)
        assert param.type_tag is TypeTag.ANY
        assert param.annotation is Any

    @pytest.mark.parametrize(
        "func",
        [
            lambda *args: None,
            lambda **kwargs: None,
            lambda *, key: None,
        ],
    )
    def test_rejects_non_positional(self, func: Any) -> None:
        with pytest.raises(RegistryError, match="must be positional"):
            describe_parameters(func)


class TestInjectable:
    def test_marks_class(self) -> None:
        assert is_injectable(_Client)
        assert is_injectable(_Client | None)
        assert not is_injectable(_Point)
        assert not is_injectable(str)


class TestProviderGroup:
    def test_decorator_records_entry(self) -> None:
        group = ProviderGroup("Demo", "Demo tools", category="Cat", tags=["a", "b"])

        @group.tool("demo_echo", "Echo a value.")
        def echo(value: str) -> str:
            return value

        assert echo("x") == "x"
        assert len(group) == 1
        (entry,) = group.entries
        assert entry.name == "demo_echo"
        assert entry.description == "Echo a value."
        assert entry.handler is echo
        assert group.tags == ("a", "b")

    def test_name_defaults_to_function(self) -> None:
        group = ProviderGroup("Demo")

        @group.tool()
        def GetThing() -> None:  # noqa: N802
            """Returns the thing.

            More detail here.
            """

        (entry,) = group.entries
        assert entry.name == "GetThing"
        assert entry.description == "Returns the thing."

    def test_add_rejects_non_callable(self) -> None:
        group = ProviderGroup("Demo")
        with pytest.raises(RegistryError, match="not callable"):
            group.add("x", "", "nope")  # type: ignore[arg-type]

    def test_repr(self) -> None:
        assert repr(ProviderGroup("Demo")) == "ProviderGroup('Demo', tools=0)"
