"""``toolrpc tools`` — list and call tools in-process."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from toolrpc.cli_commands._output import console, print_rpc_error, print_tools_table


def _dispatch(config_path: str | None, method: str, params: Any = None) -> dict[str, Any]:
    from toolrpc.binding.context import RequestContext
    from toolrpc.bootstrap import create_dispatcher, create_services
    from toolrpc.config import load_config

    config = load_config(config_path)
    dispatcher = create_dispatcher(config)
    services = create_services(config)

    async def _run() -> dict[str, Any]:
        scope = services.create_scope()
        try:
            request = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
            return await dispatcher.dispatch(request, RequestContext(services=scope))
        finally:
            await scope.aclose()

    return asyncio.run(_run())


@click.group()
def tools() -> None:
    """List and call registered tools."""


@tools.command("list")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def list_tools(config_path: str | None, as_json: bool) -> None:
    """List the tools published by ``tools/list``."""
    try:
        response = _dispatch(config_path, "tools/list")
    except Exception as exc:
        console.print(f"[red]Registry error:[/red] {exc}")
        sys.exit(1)

    if "error" in response:
        print_rpc_error(response["error"])
        sys.exit(1)

    schemas = response["result"]["tools"]
    if as_json:
        console.print_json(json.dumps(schemas))
        return
    if not schemas:
        console.print("[yellow]No tools registered.[/yellow]")
        return
    print_tools_table(schemas)


@tools.command("call")
@click.argument("name")
@click.option("--args", "-a", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None)
def call_tool(name: str, raw_args: str, config_path: str | None) -> None:
    """Invoke tool NAME and print its text content."""
    try:
        arguments = json.loads(raw_args)
    except ValueError as exc:
        console.print(f"[red]Invalid --args JSON:[/red] {exc}")
        sys.exit(2)

    try:
        response = _dispatch(config_path, "tools/invoke", {"name": name, "arguments": arguments})
    except Exception as exc:
        console.print(f"[red]Execution error:[/red] {exc}")
        sys.exit(1)

    if "error" in response:
        print_rpc_error(response["error"])
        sys.exit(1)

    for block in response["result"]["content"]:
        click.echo(block["text"])
