"""Pydantic schemas for basic-vfs."""

from basic_vfs.schemas.tree import TreeNode

__all__ = ["TreeNode"]
