"""Command-line interface for Stockroom.

This module provides the CLI commands for running and inspecting
the Stockroom application.
"""

import click

from stockroom.core.config import get_settings
from stockroom.core.logging import configure_logging, get_logger


def mask_secret(value: str | None) -> str:
    """Show only the first characters of a secret."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 4)}"


@click.group()
@click.version_option(version="0.1.0", prog_name="Stockroom")
def cli() -> None:
    """Stockroom - product catalogue API.

    Settings are read from STOCKROOM_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the Stockroom server.

    Products live in process memory, so each worker process holds its
    own copy of the collection.
    """
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    if bind_workers > 1:
        logger.warning(
            "Multiple workers do not share products; each worker has its own store",
            workers=bind_workers,
        )
    logger.info(
        "Starting Stockroom server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "stockroom.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def info() -> None:
    """Display Stockroom configuration."""
    settings = get_settings()

    click.echo(f"""
Stockroom v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Security:
  Key Header:   {settings.api_key_header}
  API Key:      {mask_secret(settings.api_key)}

Listing:
  Page Size:    {settings.default_page_size} (max {settings.max_page_size})
  Sample Data:  {settings.seed_sample_products}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI.

    This function is called when the `stockroom` command is run
    or when using `python -m stockroom`.
    """
    cli()


if __name__ == "__main__":
    main()
