"""Concrete node kinds: files, folders and symbolic links."""

import weakref
from typing import ClassVar, Iterator, List, Optional, Tuple

from loguru import logger

from basic_vfs.models.base import Entity, Reporter, quote_name
from basic_vfs.services.exceptions import (
    AttachError,
    DanglingLinkError,
    EntityNotFoundError,
)


class File(Entity):
    """Leaf node. Owns nothing."""

    def delete(self, reporter: Optional[Reporter] = None) -> None:
        if self.is_deleted:
            return
        self._report(f"deleted file {self.name}", reporter)

    def render(self) -> str:
        return quote_name(self.name)


class Folder(Entity):
    """Container node owning an ordered sequence of children.

    Children are owned exclusively: a child keeps only a weak reference back to
    its folder, and deleting the folder deletes every child. Lookup and
    deletion by id only ever look at direct children.
    """

    is_container: ClassVar[bool] = True

    def __init__(self, name: str, id: int, children: Optional[List[Entity]] = None):
        super().__init__(name, id)
        self._children: List[Entity] = []
        for child in children or []:
            self.add(child)

    @property
    def children(self) -> Tuple[Entity, ...]:
        return tuple(self._children)

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    def add(self, entity: Entity) -> Entity:
        """Attach an entity, taking ownership of it. Returns the entity."""
        if entity.is_deleted:
            raise AttachError(f"Cannot attach deleted entity '{entity.name}'")
        if entity.parent is not None:
            raise AttachError(
                f"Entity '{entity.name}' is already owned by '{entity.parent.name}'"
            )
        if self.is_deleted:
            raise AttachError(f"Cannot attach to deleted folder '{self.name}'")

        # a folder must not end up inside its own subtree
        ancestor: Optional[Entity] = self
        while ancestor is not None:
            if ancestor is entity:
                raise AttachError(f"Cannot attach '{entity.name}' inside itself")
            ancestor = ancestor.parent

        entity._parent = weakref.ref(self)
        self._children.append(entity)
        logger.debug(f"Attached {entity!r} to {self!r}")
        return entity

    def add_link(self, name: str, id: int, target: Entity) -> "SymbolicLink":
        """Create a symbolic link to an existing entity and attach it here."""
        link = SymbolicLink(name, id, target)
        self.add(link)
        return link

    def get(self, name: str) -> Optional[Entity]:
        """Return this folder or the first direct child named `name`.

        Grandchildren are never searched; call get() again on the returned
        folder to descend another level.
        """
        if self.name == name:
            return self
        for child in self._children:
            if child.name == name:
                return child
        return None

    def delete(self, reporter: Optional[Reporter] = None) -> None:
        if self.is_deleted:
            return
        # children go first, last one first
        while self._children:
            child = self._children.pop()
            child.delete(reporter)
        self._report(f"deleted folder {self.name}", reporter)

    def delete_id(self, entity_id: int, reporter: Optional[Reporter] = None) -> int:
        for child in self._children:
            if child.id == entity_id:
                # deleting a child detaches it from this folder
                child.delete(reporter)
                logger.debug(f"Removed {entity_id} from {self!r}")
                return entity_id

        raise EntityNotFoundError(
            entity_id, f"No direct child with id {entity_id} in '{self.name}'"
        )

    def _detach(self, entity: Entity) -> None:
        self._children = [child for child in self._children if child is not entity]

    def render(self) -> str:
        parts = [f"{{ {quote_name(self.name)}:"]
        for child in self._children:
            parts.append(f" {child.render()}, ")
        parts.append(" }")
        return "".join(parts)

    def walk(self) -> Iterator[Tuple[int, Entity]]:
        """Yield (depth, entity) for this folder and its owned subtree, pre-order.

        Links are yielded but never followed.
        """
        stack: List[Tuple[int, Entity]] = [(0, self)]
        while stack:
            depth, entity = stack.pop()
            yield depth, entity
            if isinstance(entity, Folder):
                stack.extend((depth + 1, child) for child in reversed(entity._children))

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Entity]:
        return iter(tuple(self._children))

    def __contains__(self, entity: object) -> bool:
        return any(child is entity for child in self._children)


class SymbolicLink(Entity):
    """Alias to another entity.

    The target is held through a weak reference: the link never owns it, never
    keeps it alive and never deletes it. Once the target is deleted the link
    is dangling and resolving it raises DanglingLinkError.
    """

    def __init__(self, name: str, id: int, target: Entity):
        super().__init__(name, id)
        if target.is_deleted:
            raise AttachError(f"Cannot link '{name}' to deleted entity '{target.name}'")
        self._target = weakref.ref(target)
        # names are frozen, so the notice can name the target even after it is gone
        self._target_label = target.name

    @property
    def is_dangling(self) -> bool:
        target = self._target()
        return target is None or target.is_deleted

    @property
    def target(self) -> Entity:
        target = self._target()
        if target is None or target.is_deleted:
            raise DanglingLinkError(f"Link '{self.name}' points to a deleted entity")
        return target

    @property
    def target_name(self) -> str:
        return self.target.name

    def delete(self, reporter: Optional[Reporter] = None) -> None:
        if self.is_deleted:
            return
        self._report(f"deleted link {self.name} -> {self._target_label}", reporter)

    def render(self) -> str:
        return f"{quote_name(self.name)} -> {quote_name(self.target_name)}"
