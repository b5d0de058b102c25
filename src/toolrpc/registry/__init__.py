"""Tool registry — descriptors, provider groups, and wire-safe aliases."""

from toolrpc.registry.aliases import AliasMap, build_alias_map, sanitize_tool_name
from toolrpc.registry.groups import ProviderGroup, describe_parameters, injectable
from toolrpc.registry.models import (
    ParameterDescriptor,
    ParameterKind,
    RegisteredTool,
    ToolDescriptor,
    TypeTag,
)
from toolrpc.registry.registry import Catalog, ToolRegistry

__all__ = [
    "AliasMap",
    "Catalog",
    "ParameterDescriptor",
    "ParameterKind",
    "ProviderGroup",
    "RegisteredTool",
    "ToolDescriptor",
    "ToolRegistry",
    "TypeTag",
    "build_alias_map",
    "describe_parameters",
    "injectable",
    "sanitize_tool_name",
]
