"""Config command implementation."""

from __future__ import annotations

import json

import typer
import yaml

from medidesk.config.settings import _parse_scalar, config_service

app = typer.Typer(name="config", help="Configuration management")


@app.command()
def show(format: str = typer.Option("yaml", help="Output format: yaml or json")) -> None:
    """Show the effective configuration after all layers are merged."""

    try:
        settings = config_service.load()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    data = settings.model_dump()

    if format.lower() == "json":
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(yaml.safe_dump(data, sort_keys=False))


@app.command()
def get(key: str = typer.Argument(..., help="Dot path (e.g., ui.message_ttl_seconds)")) -> None:
    """Get a configuration value by key path."""

    try:
        value = config_service.get_value(key)
    except KeyError:
        typer.echo(f"Unknown configuration key: {key}", err=True)
        raise typer.Exit(code=1)
    typer.echo(value)


@app.command("set")
def set_(
    key: str = typer.Argument(..., help="Dot path (e.g., ui.message_ttl_seconds)"),
    value: str = typer.Argument(..., help="Value to set (JSON or plain text)"),
    scope: str = typer.Option("user", case_sensitive=False, help="Scope: user or project"),
) -> None:
    """Set a configuration value in the selected scope."""

    scope_value = scope.lower()
    if scope_value not in {"user", "project"}:
        raise typer.BadParameter("Scope must be 'user' or 'project'")

    try:
        target = config_service.set_value(
            key, _parse_scalar(value), scope=scope_value  # type: ignore[arg-type]
        )
    except KeyError:
        typer.echo(f"Unknown configuration key: {key}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Set {key} in {scope_value} config ({target})")


@app.command()
def path() -> None:
    """Show where configuration files are read from."""

    for label, target in (
        ("user", config_service.user_config_path),
        ("project", config_service.project_config_path),
    ):
        marker = "" if target.exists() else " (missing)"
        typer.echo(f"{label}: {target}{marker}")
