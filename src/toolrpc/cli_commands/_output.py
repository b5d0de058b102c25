"""Shared CLI output formatters."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print ``tools/list`` entries as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Parameters")
    table.add_column("Category")
    table.add_column("Description")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        required = set(schema.get("required", []))
        params = [
            f"{name}{'' if name in required else '?'}"
            for name in schema.get("properties", {})
        ]
        table.add_row(
            tool.get("name", "?"),
            ", ".join(params) or "-",
            tool.get("category", "-"),
            _truncate(tool.get("description", "")),
        )

    console.print(table)


def print_rpc_error(error: dict[str, Any]) -> None:
    detail = f" ({error['data']})" if "data" in error else ""
    console.print(f"[red]Error {error['code']}:[/red] {error['message']}{detail}")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
