"""Result formatter — turns raw tool results into text content blocks.

``None`` becomes the literal text ``"null"``, strings pass through verbatim,
everything else is serialized to compact JSON.  Pydantic models are dumped by
alias with ``None`` fields dropped.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python

from toolrpc.rpc.models import TextContent


def to_compact_json(value: Any) -> str:
    jsonable = to_jsonable_python(value, by_alias=True, exclude_none=True)
    return json.dumps(jsonable, separators=(",", ":"), ensure_ascii=False)


def format_tool_result(value: Any) -> list[TextContent]:
    """Wrap a tool's return value as a single text content block."""
    if value is None:
        return [TextContent(text="null")]
    if isinstance(value, str):
        return [TextContent(text=value)]
    return [TextContent(text=to_compact_json(value))]
