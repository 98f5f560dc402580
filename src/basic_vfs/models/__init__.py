"""Node models for the namespace."""

from basic_vfs.models.base import Entity, EntityProps, Reporter, log_deletion
from basic_vfs.models.namespace import File, Folder, SymbolicLink

__all__ = [
    "Entity",
    "EntityProps",
    "Reporter",
    "log_deletion",
    "File",
    "Folder",
    "SymbolicLink",
]
