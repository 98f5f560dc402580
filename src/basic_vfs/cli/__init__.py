"""CLI for basic-vfs."""
