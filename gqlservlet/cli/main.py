"""Command line entry point for gqlservlet."""

from pathlib import Path
from typing import Any

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from gqlservlet import __version__
from gqlservlet.api.app import create_app
from gqlservlet.bootstrap import create_servlet
from gqlservlet.config.settings import Settings
from gqlservlet.core.errors import ConfigurationError
from gqlservlet.core.logging import get_logger, setup_logging
from gqlservlet.services.servlet import GraphQLHttpServlet


console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"gqlservlet {__version__}")
        raise typer.Exit()


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


@app.callback()
def app_main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """GraphQL over HTTP with lifecycle listeners."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


def _load_settings(ctx: typer.Context) -> Settings:
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return Settings.from_config(config_path)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(1) from e


def _schema_option() -> Any:
    return typer.Option(
        None,
        "--schema",
        "-s",
        help="Path to a GraphQL SDL schema file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


def _create_servlet(settings: Settings, schema: Path | None) -> GraphQLHttpServlet:
    try:
        return create_servlet(settings, schema_path=schema)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(1) from e


@app.command()
def serve(
    ctx: typer.Context,
    schema: Path | None = _schema_option(),
    host: str | None = typer.Option(None, "--host", help="Host to bind to"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Serve the schema over HTTP."""
    settings = _load_settings(ctx)
    if host is not None:
        settings.server.host = host
    if port is not None:
        settings.server.port = port
    if log_level is not None:
        settings.logging.level = log_level.upper()

    setup_logging(
        json_logs=settings.logging.json_logs, log_level_name=settings.logging.level
    )
    servlet = _create_servlet(settings, schema)

    logger.info("serve_command", host=settings.server.host, port=settings.server.port)
    uvicorn.run(
        create_app(servlet, settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


@app.command()
def query(
    ctx: typer.Context,
    document: str = typer.Argument(..., help="GraphQL query text"),
    schema: Path | None = _schema_option(),
) -> None:
    """Execute a query against the schema and print the JSON result."""
    settings = _load_settings(ctx)
    setup_logging(json_logs=settings.logging.json_logs, log_level_name="WARNING")
    servlet = _create_servlet(settings, schema)

    typer.echo(servlet.execute_query(document))


@app.command()
def fields(
    ctx: typer.Context,
    schema: Path | None = _schema_option(),
) -> None:
    """List query and mutation field names of the schema."""
    settings = _load_settings(ctx)
    setup_logging(json_logs=settings.logging.json_logs, log_level_name="WARNING")
    servlet = _create_servlet(settings, schema)

    table = Table(title="Schema fields")
    table.add_column("Operation", style="cyan")
    table.add_column("Field", style="green")
    for name in servlet.get_queries():
        table.add_row("query", name)
    for name in servlet.get_mutations():
        table.add_row("mutation", name)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
