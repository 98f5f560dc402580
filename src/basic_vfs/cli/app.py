from typing import Optional

import typer

from basic_vfs import __version__
from basic_vfs.config import init_cli_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        typer.echo(f"basic-vfs version: {__version__}")
        raise typer.Exit()


app = typer.Typer(name="basic-vfs", help="In-memory namespace of files, folders and links")


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """basic-vfs - build, inspect and prune in-memory namespace trees."""
    init_cli_logging()
