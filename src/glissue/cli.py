"""CLI interface for glissue."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from glissue import __version__
from glissue.commands.issue import build_issue_app
from glissue.config import Config

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"glissue {__version__}")
        raise typer.Exit()


def create_app(console: Console = console) -> typer.Typer:
    """Compose the command tree.

    Args:
        console: Console shared by all command groups.

    Returns:
        Root Typer app with every command group attached.
    """
    app = typer.Typer(
        name="glissue",
        help="View GitLab issues from the command line.",
        no_args_is_help=True,
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Enable debug logging"),
        ] = False,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Config file (default: .glissue/config.yaml, ~/.config/glissue/config.yaml)"),
        ] = None,
        version: Annotated[
            bool,
            typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
        ] = False,
    ) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        try:
            ctx.obj = Config.load(config_path)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e))}")
            raise typer.Exit(1) from e

    app.add_typer(build_issue_app(console), name="issue")
    return app


app = create_app()


if __name__ == "__main__":
    app()
