"""Command-line interface for Minibase.

This module provides the CLI commands for running and managing
the Minibase application.
"""

import asyncio

import click

from minibase import __version__
from minibase.core.config import get_settings
from minibase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Minibase")
def cli() -> None:
    """Minibase - a minimal Backend-as-a-Service.

    Users and schemaless document collections over HTTP.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Minibase server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    bind_host = host or settings.host
    bind_port = port or settings.port

    logger = get_logger(__name__)
    logger.info(
        "Starting Minibase server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "minibase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else settings.workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the users and collection metadata tables, then exit."""
    from minibase.infrastructure.persistence.database import (
        DatabaseManager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    async def _init() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
        finally:
            await db.disconnect()

    try:
        asyncio.run(_init())
    except RuntimeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Database initialized: {settings.database_url}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
