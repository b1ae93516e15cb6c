"""Main Typer application — imports and registers all CLI commands.

Entry point: ``artistledger`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from artistledger.cli.commands.artist import (
    register_cmd,
    show_cmd,
    unregister_cmd,
    update_cmd,
)
from artistledger.cli.commands.chain import (
    advance_cmd,
    balance_cmd,
    endow_cmd,
    events_cmd,
    fingerprint_cmd,
)
from artistledger.config import RegistrySettings

app = typer.Typer(
    name="artistledger",
    help="artistledger: deposit-backed registry of artist records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    state: Path = typer.Option(
        None,
        "--state",
        "-s",
        help="Path to the registry state database (default from settings).",
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (default from settings)."
    ),
) -> None:
    """Load settings, configure logging and remember the state path."""
    settings = RegistrySettings()
    level = log_level or ("DEBUG" if settings.debug else settings.log_level)
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[
            RichHandler(show_path=False, rich_tracebacks=not settings.is_production)
        ],
        force=True,
    )
    ctx.obj = {"settings": settings, "state_path": state or settings.state_path}


# Register subcommands
app.command(name="register", help="Register an owner as an artist.")(register_cmd)
app.command(name="update", help="Update one field of an artist.")(update_cmd)
app.command(name="unregister", help="Unregister an artist and release its deposit.")(
    unregister_cmd
)
app.command(name="show", help="Show an artist by owner or by name.")(show_cmd)
app.command(name="endow", help="Set the free balance of an account.")(endow_cmd)
app.command(name="balance", help="Show free and reserved balance of an account.")(
    balance_cmd
)
app.command(name="advance", help="Advance the block clock.")(advance_cmd)
app.command(name="events", help="List registry events.")(events_cmd)
app.command(name="fingerprint", help="Print the content fingerprint of a file.")(
    fingerprint_cmd
)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
