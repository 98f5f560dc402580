"""Schemas for namespace tree snapshots."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class TreeNode(BaseModel):
    """Plain-data description of one entity and, for folders, its subtree."""

    name: str = Field(min_length=1)
    id: int = Field(ge=0)
    type: Literal["file", "folder", "symlink"]
    children: List["TreeNode"] = []  # Folders only
    target_id: Optional[int] = None  # Symlinks only
    target_name: Optional[str] = None  # Informational, ignored when building

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @model_validator(mode="after")
    def check_kind_fields(self) -> "TreeNode":
        if self.type != "folder" and self.children:
            raise ValueError(f"{self.type} '{self.name}' cannot have children")
        if self.type == "symlink" and self.target_id is None:
            raise ValueError(f"symlink '{self.name}' requires target_id")
        if self.type != "symlink" and self.target_id is not None:
            raise ValueError(f"only symlinks carry target_id, got {self.type} '{self.name}'")
        return self


# Support for recursive model
TreeNode.model_rebuild()
