"""toolrpc CLI entrypoint."""

from __future__ import annotations

import click

from toolrpc import __version__


@click.group()
@click.version_option(version=__version__, prog_name="toolrpc")
def main() -> None:
    """toolrpc — JSON-RPC tool server."""


# Register subcommands
from toolrpc.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
