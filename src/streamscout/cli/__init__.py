"""Command-line interface for streamscout.

This package provides the Typer app and the console helpers used by all CLI
commands and user-facing output.

- app: The Typer application object; every command is registered on it in
  ``streamscout.cli.commands``.
- main: Console-script entrypoint.
"""

from streamscout.cli.commands import app, main

__all__ = ["app", "main"]
