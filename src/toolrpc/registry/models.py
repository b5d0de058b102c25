"""Registry models — immutable tool and parameter descriptors.

A :class:`ToolDescriptor` is built once while the registry initializes and is
never mutated afterwards.  :meth:`ToolDescriptor.public` derives the shorter
copy published over ``tools/list`` (request-scoped injectables removed).
"""

from __future__ import annotations

import types
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Type tags
# ---------------------------------------------------------------------------


class TypeTag(str, Enum):
    """Closed set of semantic parameter types."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"


# Anything outside the scalar tags is published as "string".
_SCHEMA_TYPES: dict[TypeTag, str] = {
    TypeTag.STRING: "string",
    TypeTag.INTEGER: "integer",
    TypeTag.NUMBER: "number",
    TypeTag.BOOLEAN: "boolean",
}


def json_schema_type(tag: TypeTag) -> str:
    """Map a :class:`TypeTag` onto its JSON-Schema ``type`` keyword."""
    return _SCHEMA_TYPES.get(tag, "string")


def unwrap_annotation(annotation: Any) -> Any:
    """Strip ``Annotated[...]`` and ``Optional[...]`` wrappers."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if is_union(annotation):
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return unwrap_annotation(members[0])
    return annotation


def is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def is_nullable(annotation: Any) -> bool:
    """Return ``True`` for ``X | None``, ``Optional[X]`` and bare ``None``."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if annotation is None or annotation is type(None):
        return True
    return is_union(annotation) and type(None) in get_args(annotation)


def type_tag_for(annotation: Any) -> TypeTag:
    """Derive the semantic :class:`TypeTag` of a Python annotation."""
    base = unwrap_annotation(annotation)
    origin = get_origin(base) or base
    if not isinstance(origin, type):
        return TypeTag.ANY
    # bool is a subclass of int — check it first.
    if issubclass(origin, bool):
        return TypeTag.BOOLEAN
    if issubclass(origin, str):
        return TypeTag.STRING
    if issubclass(origin, int):
        return TypeTag.INTEGER
    if issubclass(origin, (float, Decimal)):
        return TypeTag.NUMBER
    if issubclass(origin, (BaseModel, Mapping)):
        return TypeTag.OBJECT
    if issubclass(origin, Sequence) or issubclass(origin, (set, frozenset)):
        return TypeTag.ARRAY
    return TypeTag.ANY


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class ParameterKind(str, Enum):
    """Where a parameter's value comes from."""

    ARGUMENT = "argument"
    CANCELLATION = "cancellation"
    SERVICE = "service"


class ParameterDescriptor(BaseModel):
    """One declared tool parameter."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    type_tag: TypeTag = TypeTag.STRING
    is_optional: bool = False
    has_default: bool = False
    default: Any = None
    annotation: Any = Field(default=Any)
    kind: ParameterKind = ParameterKind.ARGUMENT

    @property
    def required(self) -> bool:
        return not self.is_optional and not self.has_default


class ToolDescriptor(BaseModel):
    """Immutable metadata for one registered tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    qualified_name: str
    description: str = ""
    parameters: tuple[ParameterDescriptor, ...] = ()
    category: str | None = None
    tags: tuple[str, ...] = ()

    def public(self) -> ToolDescriptor:
        """Return a copy without request-scoped injectable parameters."""
        visible = tuple(p for p in self.parameters if p.kind is ParameterKind.ARGUMENT)
        return self.model_copy(update={"parameters": visible})

    def input_schema(self) -> dict[str, Any]:
        """Build the JSON-Schema-like ``inputSchema`` object for this tool."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for param in self.parameters:
            properties[param.name] = {"type": json_schema_type(param.type_tag)}
            if param.required:
                required.append(param.name)
        schema: dict[str, Any] = {
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
        if required:
            schema["required"] = required
        return schema


@dataclass(frozen=True)
class RegisteredTool:
    """A descriptor paired with the callable that implements it."""

    descriptor: ToolDescriptor
    handler: Callable[..., Any]

    @property
    def name(self) -> str:
        return self.descriptor.name
