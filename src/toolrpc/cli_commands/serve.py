"""``toolrpc serve`` — run the HTTP server."""

from __future__ import annotations

import logging
import sys

import click

from toolrpc.cli_commands._output import console


def configure_logging(level: str) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    # The request-logging middleware already reports every request.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@click.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None,
              help="Path to a YAML config file.")
@click.option("--host", default=None, help="Override the bind address.")
@click.option("--port", "-p", type=int, default=None, help="Override the listen port.")
@click.option("--log-level", default=None, help="Override the log level.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(
    config_path: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve the registered tools over JSON-RPC."""
    import uvicorn

    from toolrpc.bootstrap import create_dispatcher
    from toolrpc.config import ServerConfig, load_config
    from toolrpc.errors import ConfigError
    from toolrpc.http.app import create_app

    try:
        config = load_config(config_path)
        overrides = {
            key: value
            for key, value in {"host": host, "port": port, "log_level": log_level}.items()
            if value is not None
        }
        if overrides:
            config = ServerConfig.model_validate({**config.model_dump(), **overrides})
    except (ConfigError, ValueError) as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    configure_logging(config.log_level)

    if telemetry or config.telemetry.enabled:
        from toolrpc.utils.telemetry import configure_telemetry

        configure_telemetry(config.telemetry, service_name=config.server.name)

    app = create_app(create_dispatcher(config), config=config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
