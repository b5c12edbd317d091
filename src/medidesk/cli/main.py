"""
Main CLI application definition.

MediDesk: terminal front end for hospital operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from medidesk.cli.commands import config as config_commands
from medidesk.config.settings import Settings, reload_settings
from medidesk.data.exceptions import StoreError
from medidesk.data.store import SQLiteUserStore, seed_root_user
from medidesk.utils.logging import configure_from_settings, get_logger

logger = get_logger("cli")

app = typer.Typer(
    name="medidesk",
    help="""MediDesk: terminal front end for hospital operations

    \b
    COMMANDS:
      launch    - Start the terminal UI (default)
      init-db   - Create the account database
      add-user  - Create an account
      config    - View configuration
    """,
    add_completion=False,
    rich_markup_mode="markdown",
)


def _load_settings(
    db: Path | None = None,
    log_file: Path | None = None,
    verbose: bool = False,
) -> Settings:
    cli_overrides: dict[str, Any] = {"general": {}, "storage": {}}
    if db is not None:
        cli_overrides["storage"]["db_path"] = str(db)
        cli_overrides["storage"]["backend"] = "sqlite"
    if log_file is not None:
        cli_overrides["general"]["log_file"] = str(log_file)
    if verbose:
        cli_overrides["general"]["verbosity"] = "debug"

    try:
        return reload_settings(cli_overrides=cli_overrides)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)


def _launch(settings: Settings) -> None:
    try:
        from medidesk.tui.app import launch as launch_tui
    except ImportError as e:
        typer.echo("TUI dependencies not installed.", err=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    launch_tui(settings)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start the terminal UI when no command is given."""
    if ctx.invoked_subcommand is None:
        _launch(_load_settings())


@app.command()
def launch(
    db: Path | None = typer.Option(None, "--db", help="Path to the SQLite account database"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at debug level"),
) -> None:
    """Start the terminal UI."""
    _launch(_load_settings(db=db, log_file=log_file, verbose=verbose))


@app.command("init-db")
def init_db(
    db: Path | None = typer.Option(None, "--db", help="Path to the SQLite account database"),
) -> None:
    """Create the account schema and seed the root user if configured."""
    settings = _load_settings(db=db)
    configure_from_settings(settings, console=True)
    db_path = Path(settings.storage.db_path).expanduser()
    store = SQLiteUserStore(db_path=db_path)
    try:
        seeded = settings.storage.seed_root_user and seed_root_user(store)
    finally:
        store.close()
    typer.echo(f"Initialized account database at {db_path}")
    if seeded:
        typer.echo("Created default account 'root' (password 'root')")


@app.command("add-user")
def add_user(
    username: str = typer.Argument(..., help="Login name"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True
    ),
    db: Path | None = typer.Option(None, "--db", help="Path to the SQLite account database"),
) -> None:
    """Create an account without going through the UI."""
    if not username or not password:
        typer.echo("Username and password cannot be empty.", err=True)
        raise typer.Exit(1)

    settings = _load_settings(db=db)
    configure_from_settings(settings, console=True)
    store = SQLiteUserStore(db_path=Path(settings.storage.db_path).expanduser())
    try:
        user_id = store.create_user(username, password)
    except StoreError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)
    finally:
        store.close()
    typer.echo(f"Created user '{username}' (id {user_id})")


@app.command()
def version() -> None:
    """Show version information."""
    from medidesk import __version__

    typer.echo(f"MediDesk version {__version__}")


app.add_typer(config_commands.app, name="config")


if __name__ == "__main__":
    app()
