"""CLI module for MediDesk."""

from medidesk.cli.main import app

__all__ = ["app"]
