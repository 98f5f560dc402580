"""Namespace service for snapshots, validation and listings over a tree."""

import fnmatch
from typing import Dict, List, Optional

from loguru import logger

from basic_vfs.config import BasicVfsConfig
from basic_vfs.models import Entity, File, Folder, Reporter, SymbolicLink, log_deletion
from basic_vfs.schemas.tree import TreeNode
from basic_vfs.services.exceptions import DuplicateIdError, EntityNotFoundError


def _discard(notice: str) -> None:
    pass


def build_tree(node: TreeNode) -> Folder:
    """Assemble a live tree from a snapshot.

    Files and folders are created first. They are then attached in document
    order, creating each link as it is reached; a link resolves its target_id
    against every file and folder plus the links created before it (first
    occurrence of an id wins).

    Raises:
        ValueError: If the snapshot root is not a folder
        EntityNotFoundError: If a link refers to an id that is not in the snapshot
    """
    if node.type != "folder":
        raise ValueError(f"Snapshot root must be a folder, got {node.type} '{node.name}'")

    by_id: Dict[int, Entity] = {}
    created: List[Entity] = []

    def create(entry: TreeNode) -> Entity:
        entity: Entity
        if entry.type == "folder":
            entity = Folder(entry.name, entry.id)
        else:
            entity = File(entry.name, entry.id)
        created.append(entity)
        by_id.setdefault(entity.id, entity)
        for child in entry.children:
            if child.type != "symlink":
                create(child)
        return entity

    root = create(node)
    assert isinstance(root, Folder)
    # same pre-order as create()
    shells = iter(created[1:])

    def attach(entry: TreeNode, folder: Folder) -> None:
        for child in entry.children:
            if child.type == "symlink":
                assert child.target_id is not None
                target = by_id.get(child.target_id)
                if target is None:
                    raise EntityNotFoundError(
                        child.target_id,
                        f"Link '{child.name}' targets unknown id {child.target_id}",
                    )
                link = folder.add_link(child.name, child.id, target)
                by_id.setdefault(link.id, link)
                continue

            entity = folder.add(next(shells))
            if isinstance(entity, Folder):
                attach(child, entity)

    attach(node, root)
    logger.debug(f"Built tree '{root.name}' with {len(by_id)} distinct ids")
    return root


def to_tree_node(entity: Entity) -> TreeNode:
    """Export an entity and its owned subtree as a snapshot."""
    if isinstance(entity, Folder):
        return TreeNode(
            name=entity.name,
            id=entity.id,
            type="folder",
            children=[to_tree_node(child) for child in entity],
        )
    if isinstance(entity, SymbolicLink):
        target = entity.target
        return TreeNode(
            name=entity.name,
            id=entity.id,
            type="symlink",
            target_id=target.id,
            target_name=target.name,
        )
    return TreeNode(name=entity.name, id=entity.id, type="file")


class NamespaceService:
    """Service for working with a namespace tree rooted at one folder."""

    def __init__(self, root: Folder, config: Optional[BasicVfsConfig] = None):
        """Initialize the namespace service.

        Args:
            root: Root folder of the tree.
            config: Settings; defaults are used when omitted.

        Raises:
            DuplicateIdError: When strict_ids is enabled and ids repeat.
        """
        self._root = root
        self.config = config or BasicVfsConfig()
        if self.config.strict_ids:
            self.validate_unique_ids()

    @classmethod
    def from_snapshot(
        cls, node: TreeNode, config: Optional[BasicVfsConfig] = None
    ) -> "NamespaceService":
        return cls(build_tree(node), config)

    @property
    def root(self) -> Folder:
        return self._root

    @property
    def reporter(self) -> Reporter:
        """Reporter used when a caller does not supply one."""
        return log_deletion if self.config.deletion_notices else _discard

    def snapshot(self) -> TreeNode:
        """Export the tree. Raises DanglingLinkError if a link has lost its target."""
        return to_tree_node(self._root)

    def find_duplicate_ids(self) -> Dict[int, List[Entity]]:
        """Map each id that occurs more than once to the entities carrying it."""
        seen: Dict[int, List[Entity]] = {}
        for _, entity in self._root.walk():
            seen.setdefault(entity.id, []).append(entity)
        return {entity_id: entities for entity_id, entities in seen.items() if len(entities) > 1}

    def validate_unique_ids(self) -> None:
        duplicates = self.find_duplicate_ids()
        if duplicates:
            logger.warning(f"Duplicate ids in '{self._root.name}': {sorted(duplicates)}")
            raise DuplicateIdError(duplicates)

    def dangling_links(self) -> List[SymbolicLink]:
        return [
            entity
            for _, entity in self._root.walk()
            if isinstance(entity, SymbolicLink) and entity.is_dangling
        ]

    def list_folder(
        self,
        folder: Optional[Folder] = None,
        depth: int = 1,
        name_glob: Optional[str] = None,
    ) -> List[Entity]:
        """List folder contents with depth control and name filtering.

        This is an explicit deep listing, separate from the shallow get().

        Args:
            folder: Folder to list (default: the root)
            depth: Recursion depth (1 = direct children only)
            name_glob: Glob pattern applied to entity names

        Returns:
            Matching entities in pre-order
        """
        if folder is None:
            folder = self._root
        result: List[Entity] = []
        self._collect_recursive(folder, result, depth, name_glob, 0)
        return result

    def _collect_recursive(
        self,
        folder: Folder,
        result: List[Entity],
        max_depth: int,
        name_glob: Optional[str],
        current_depth: int,
    ) -> None:
        if current_depth >= max_depth:
            return

        for child in folder:
            # Non-matching folders are still descended into
            if not name_glob or fnmatch.fnmatch(child.name, name_glob):
                result.append(child)

            if isinstance(child, Folder):
                self._collect_recursive(child, result, max_depth, name_glob, current_depth + 1)

    def delete_id(
        self,
        entity_id: int,
        folder: Optional[Folder] = None,
        reporter: Optional[Reporter] = None,
    ) -> int:
        """Delete the direct child of `folder` (default: root) with the given id."""
        if folder is None:
            folder = self._root
        logger.debug(f"Deleting id {entity_id} from '{folder.name}'")
        return folder.delete_id(entity_id, reporter or self.reporter)
