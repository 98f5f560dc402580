"""Main CLI entry point for basic-vfs."""

from basic_vfs.cli.app import app

# Register commands
from basic_vfs.cli.commands import demo, tree  # noqa: F401

if __name__ == "__main__":  # pragma: no cover
    app()
