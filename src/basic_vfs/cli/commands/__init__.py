"""CLI commands for basic-vfs."""

from . import demo, tree

__all__ = ["demo", "tree"]
