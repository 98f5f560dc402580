"""Entity abstraction shared by every node kind in the namespace.

Every node carries an identity record (name and numeric id) and implements the
same capability set: shallow lookup, cascading deletion, deletion of a direct
child by id, and a canonical string rendering. Concrete kinds live in
basic_vfs.models.namespace.
"""

import json
import weakref
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional, TYPE_CHECKING

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from basic_vfs.services.exceptions import UnsupportedOperationError

if TYPE_CHECKING:  # pragma: no cover
    from basic_vfs.models.namespace import Folder


Reporter = Callable[[str], None]
"""Receives one human-readable notice per destroyed node."""


def log_deletion(notice: str) -> None:
    """Default reporter: log the notice."""
    logger.info(notice)


def quote_name(name: str) -> str:
    """Render a name as a quoted string literal, escaped the way JSON escapes strings."""
    return json.dumps(name, ensure_ascii=False)


class EntityProps(BaseModel):
    """Identity record carried by every entity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Comparison key for lookups")
    id: int = Field(ge=0, description="Identifier, intended unique across a tree")


class Entity(ABC):
    """A node in the namespace."""

    is_container: ClassVar[bool] = False

    def __init__(self, name: str, id: int):
        self.props = EntityProps(name=name, id=id)
        self._parent: Optional[weakref.ReferenceType["Folder"]] = None
        self._deleted = False

    @property
    def name(self) -> str:
        return self.props.name

    @property
    def id(self) -> int:
        return self.props.id

    @property
    def parent(self) -> Optional["Folder"]:
        """The folder owning this entity, or None for a root or detached entity."""
        return self._parent() if self._parent is not None else None

    @property
    def is_deleted(self) -> bool:
        return self._deleted

    def get(self, name: str) -> Optional["Entity"]:
        """Return this entity if its own name matches, else None."""
        if self.name == name:
            return self
        return None

    def get_mut(self, name: str) -> Optional["Entity"]:
        """Mutable lookup.

        Python has no separate mutable borrow, so this returns the same object
        as get(). It exists so callers can state that they intend to mutate
        the result, e.g. ``root.get_mut("folder3/").delete_id(5)``.
        """
        return self.get(name)

    @abstractmethod
    def delete(self, reporter: Optional[Reporter] = None) -> None:
        """Tear down this entity and everything it owns, reporting each removal."""

    def delete_id(self, entity_id: int, reporter: Optional[Reporter] = None) -> int:
        """Delete the direct child with the given id and return the id.

        Node kinds without children always raise UnsupportedOperationError.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} '{self.name}' cannot contain children"
        )

    @abstractmethod
    def render(self) -> str:
        """Canonical string form."""

    def _report(self, notice: str, reporter: Optional[Reporter]) -> None:
        parent = self.parent
        if parent is not None:
            parent._detach(self)
        self._deleted = True
        self._parent = None
        (reporter or log_deletion)(notice)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, id={self.id})"
