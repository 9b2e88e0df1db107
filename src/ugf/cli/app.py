"""Main CLI application."""

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from ugf.config import UgfConfig

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="ugf",
    help="UGF - Urban Greening Factor analyzer",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """UGF - Urban Greening Factor analyzer."""


@app.command()
def serve(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
        ),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            "-h",
            help="Host to bind to (default from config)",
        ),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Port to bind to (default from config)",
        ),
    ] = None,
) -> None:
    """Start the analyzer HTTP server."""
    from ugf.cli.console import error
    from ugf.config import ConfigError, load_config, require_api_key
    from ugf.logging import configure_logging

    configure_logging(use_rich=True)

    try:
        ugf_config = load_config(config)
        require_api_key(ugf_config)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        error(str(e))
        raise typer.Exit(1) from None

    try:
        asyncio.run(
            _run_server(
                ugf_config,
                host=host or ugf_config.server.host,
                port=port or ugf_config.server.port,
            )
        )
    except KeyboardInterrupt:
        print("\nServer stopped")


async def _run_server(config: "UgfConfig", *, host: str, port: int) -> None:
    from ugf.server import ServerRunner, create_app

    app = create_app(config)
    await ServerRunner(app, host=host, port=port).run()
