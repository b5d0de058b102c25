"""ArgumentBinder — maps JSON arguments and injected services onto a tool.

For each declared parameter the first matching source wins:

1. the request's cancellation token (``CancellationToken`` parameters);
2. a service resolved from the request's :class:`ServiceScope`;
3. a provided JSON value, coerced to the declared annotation;
4. the declared default;
5. ``None`` for optional/nullable parameters;
6. otherwise :class:`~toolrpc.errors.InvalidParamsError`.

Provided arguments never override injected services.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from toolrpc.binding.context import RequestContext
from toolrpc.errors import InvalidParamsError
from toolrpc.registry.models import (
    ParameterDescriptor,
    ParameterKind,
    RegisteredTool,
    unwrap_annotation,
)

_ADAPTERS: dict[Any, TypeAdapter[Any]] = {}


def _adapter_for(annotation: Any) -> TypeAdapter[Any]:
    try:
        return _ADAPTERS[annotation]
    except KeyError:
        adapter: TypeAdapter[Any] = TypeAdapter(annotation)
        _ADAPTERS[annotation] = adapter
        return adapter
    except TypeError:  # unhashable annotation
        return TypeAdapter(annotation)


def match_keys(value: Any, annotation: Any) -> Any:
    """Rename mapping keys case-insensitively onto the target model's fields."""
    target = unwrap_annotation(annotation)

    if isinstance(value, Mapping) and isinstance(target, type) and issubclass(target, BaseModel):
        fields: dict[str, tuple[str, Any]] = {}
        for field_name, info in target.model_fields.items():
            key = info.alias or field_name
            fields[field_name.lower()] = (key, info.annotation)
            fields[key.lower()] = (key, info.annotation)
        matched: dict[Any, Any] = {}
        for raw_key, item in value.items():
            hit = fields.get(raw_key.lower()) if isinstance(raw_key, str) else None
            if hit is None:
                matched[raw_key] = item
            else:
                matched[hit[0]] = match_keys(item, hit[1])
        return matched

    origin = get_origin(target)
    if isinstance(value, list) and isinstance(origin, type) and issubclass(origin, Sequence):
        args = get_args(target)
        if args:
            return [match_keys(item, args[0]) for item in value]
    return value


class ArgumentBinder:
    """Builds the positional argument vector for a tool invocation."""

    def bind(
        self,
        tool: RegisteredTool,
        arguments: Mapping[str, Any] | None,
        context: RequestContext,
    ) -> list[Any]:
        provided = {key.lower(): value for key, value in (arguments or {}).items()}
        return [
            self._bind_parameter(tool, param, provided, context)
            for param in tool.descriptor.parameters
        ]

    def _bind_parameter(
        self,
        tool: RegisteredTool,
        param: ParameterDescriptor,
        provided: dict[str, Any],
        context: RequestContext,
    ) -> Any:
        if param.kind is ParameterKind.CANCELLATION:
            return context.cancellation

        service = context.services.resolve(param.annotation)
        if service is not None:
            return service

        key = param.name.lower()
        if param.kind is ParameterKind.ARGUMENT and key in provided:
            return self._coerce(tool, param, provided[key])

        if param.has_default:
            return param.default

        if param.is_optional:
            return None

        raise InvalidParamsError(
            f"Missing required argument '{param.name}' for tool "
            f"'{tool.descriptor.qualified_name}'.",
            parameter=param.name,
        )

    @staticmethod
    def _coerce(tool: RegisteredTool, param: ParameterDescriptor, value: Any) -> Any:
        adapter = _adapter_for(param.annotation)
        try:
            return adapter.validate_python(match_keys(value, param.annotation))
        except ValidationError as exc:
            first = exc.errors()[0]["msg"] if exc.errors() else str(exc)
            raise InvalidParamsError(
                f"Invalid value for argument '{param.name}' of tool "
                f"'{tool.descriptor.name}': {first}",
                parameter=param.name,
            ) from exc
