"""CLI module for meilisearch-lite."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import TYPE_CHECKING

import typer

from meilisearch_lite import __version__
from meilisearch_lite.client import (
    MeilisearchClient,
    MeilisearchError,
    SearchRequest,
    UpdateStatus,
)
from meilisearch_lite.config import ConfigurationError, Settings, load_settings
from meilisearch_lite.observability import LogLevel, configure_logging


if TYPE_CHECKING:
    from collections.abc import Iterator


app = typer.Typer(
    name="meili-lite",
    help="Command-line client for a Meilisearch server.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:  # noqa: FBT001
    """Print version and exit."""
    if value:
        typer.echo(f"meili-lite version {__version__}")
        raise typer.Exit


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


@contextmanager
def _open_client(ctx: typer.Context) -> Iterator[MeilisearchClient]:
    """Open a client for the configured server and report its errors."""
    settings: Settings = ctx.obj
    try:
        with MeilisearchClient.from_settings(settings) as client:
            yield client
    except MeilisearchError as exc:
        raise _fail(str(exc)) from exc


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging.",
    ),
    quiet: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--quiet",
        "-q",
        help="Only show warnings and errors.",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
) -> None:
    """meilisearch-lite CLI."""
    del version  # Handled by callback

    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive.", err=True)
        raise typer.Exit(1)

    try:
        settings = load_settings(config_file, require_config_file=bool(config_file))
    except ConfigurationError as exc:
        raise _fail(exc.message) from exc

    if verbose:
        level = LogLevel.DEBUG
    elif quiet:
        level = LogLevel.WARNING
    else:
        level = settings.logging.level

    configure_logging(level=level, log_format=settings.logging.format)
    ctx.obj = settings


@app.command()
def health(ctx: typer.Context) -> None:
    """Check that the server is healthy."""
    with _open_client(ctx) as client:
        client.health.get()
    typer.echo("healthy")


@app.command()
def version(ctx: typer.Context) -> None:
    """Show the server version."""
    with _open_client(ctx) as client:
        info = client.version.get()
    typer.echo(f"{info.pkg_version} (commit {info.commit_sha})")


@app.command()
def indexes(ctx: typer.Context) -> None:
    """List the indexes of the server."""
    with _open_client(ctx) as client:
        found = client.indexes.list()
    for index in found:
        primary_key = index.primary_key or "-"
        typer.echo(f"{index.uid}\t{index.name}\t{primary_key}")


@app.command()
def search(
    ctx: typer.Context,
    index_uid: str = typer.Argument(..., help="Index to search."),
    query: str = typer.Argument("", help="Search query; empty for all documents."),
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Maximum hits."),
    offset: int = typer.Option(0, "--offset", "-o", min=0, help="Hits to skip."),
) -> None:
    """Search an index and print the hits as JSON lines."""
    request = SearchRequest(
        query=query,
        limit=limit,
        offset=offset,
        placeholder_search=not query,
    )
    with _open_client(ctx) as client:
        result = client.search(index_uid).search(request)
    for hit in result.hits:
        typer.echo(json.dumps(hit, ensure_ascii=False))


@app.command()
def wait(
    ctx: typer.Context,
    index_uid: str = typer.Argument(..., help="Index the update belongs to."),
    update_id: int = typer.Argument(..., help="Update identifier."),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait (default from configuration).",
    ),
    interval: float | None = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between polls (default from configuration).",
    ),
) -> None:
    """Wait for an update to be processed and print its status."""
    polling = ctx.obj.polling
    with _open_client(ctx) as client:
        status = client.wait_for_pending_update(
            index_uid,
            update_id,
            timeout=timeout if timeout is not None else polling.timeout,
            interval=interval if interval is not None else polling.interval,
        )
    typer.echo(str(status))
    if status is not UpdateStatus.PROCESSED:
        raise typer.Exit(1)


@app.command()
def config(ctx: typer.Context) -> None:
    """Validate configuration and show the effective server settings."""
    settings: Settings = ctx.obj
    typer.echo(f"host: {settings.meilisearch.host}")
    typer.echo(f"api_key: {'set' if settings.meilisearch.api_key else 'not set'}")
    polling = settings.polling
    typer.echo(
        f"polling: timeout={polling.timeout}s interval={polling.interval}s "
        f"on_fetch_error={polling.fetch_failure_policy}"
    )


__all__ = ["app"]
