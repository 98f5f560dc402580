"""Tree commands: render, show, get, delete-id and validate snapshots."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.tree import Tree

from basic_vfs.cli.app import app
from basic_vfs.config import ConfigManager
from basic_vfs.models import Entity, Folder, SymbolicLink
from basic_vfs.schemas.tree import TreeNode
from basic_vfs.services.exceptions import NamespaceError
from basic_vfs.services.namespace_service import NamespaceService

console = Console(soft_wrap=True)

SnapshotArg = Annotated[Path, typer.Argument(help="Path to a JSON tree snapshot")]


def load_service(snapshot: Path) -> NamespaceService:
    """Load a snapshot file into a service, exiting with a message on failure."""
    try:
        node = TreeNode.model_validate_json(snapshot.read_text(encoding="utf-8"))
        return NamespaceService.from_snapshot(node, ConfigManager().config)
    except OSError as e:
        console.print(f"[red]Cannot read snapshot {snapshot}: {e}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid snapshot {snapshot}:[/red]\n{e}")
        raise typer.Exit(1)
    except NamespaceError as e:
        console.print(f"[red]Cannot build tree from {snapshot}: {e}[/red]")
        raise typer.Exit(1)


def add_entity_to_tree(branch: Tree, entity: Entity) -> None:
    """Add an entity, and for folders its children, to a rich tree."""
    if isinstance(entity, Folder):
        sub = branch.add(f"[bold blue]{entity.name}[/bold blue] [dim]#{entity.id}[/dim]")
        for child in entity:
            add_entity_to_tree(sub, child)
    elif isinstance(entity, SymbolicLink):
        target = "[red]<dangling>[/red]" if entity.is_dangling else entity.target_name
        branch.add(f"[cyan]{entity.name}[/cyan] -> {target} [dim]#{entity.id}[/dim]")
    else:
        branch.add(f"{entity.name} [dim]#{entity.id}[/dim]")


@app.command()
def render(snapshot: SnapshotArg):
    """Print the canonical rendering of a snapshot."""
    service = load_service(snapshot)
    print(service.root.render())


@app.command()
def show(snapshot: SnapshotArg):
    """Display a snapshot as a tree."""
    service = load_service(snapshot)
    root = service.root
    tree = Tree(f"[bold blue]{root.name}[/bold blue] [dim]#{root.id}[/dim]")
    for child in root:
        add_entity_to_tree(tree, child)
    console.print(tree)


@app.command()
def get(
    snapshot: SnapshotArg,
    name: Annotated[str, typer.Argument(help="Name of the root or one of its direct children")],
):
    """Look up a name at the root level of a snapshot (direct children only)."""
    service = load_service(snapshot)
    entity = service.root.get(name)
    if entity is None:
        console.print(f"[yellow]Not found at root level: {name}[/yellow]")
        raise typer.Exit(1)
    print(entity.render())


@app.command("delete-id")
def delete_id(
    snapshot: SnapshotArg,
    entity_id: Annotated[int, typer.Argument(help="Id of a direct child of the root")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the resulting snapshot to this file"),
    ] = None,
):
    """Delete a direct child of the root, and its subtree, by id."""
    service = load_service(snapshot)

    def reporter(notice: str) -> None:
        console.print(notice, markup=False)

    try:
        removed = service.delete_id(entity_id, reporter=reporter)
    except NamespaceError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    logger.info(f"Removed id {removed} from {snapshot}")
    console.print(f"[green]Removed {removed}[/green]")
    try:
        print(service.root.render())
    except NamespaceError as e:
        console.print(f"[yellow]Cannot render the result: {e}[/yellow]")

    if output is not None:
        try:
            result = service.snapshot()
        except NamespaceError as e:
            console.print(f"[red]Cannot snapshot the result: {e}[/red]")
            raise typer.Exit(1)
        output.write_text(
            result.model_dump_json(indent=service.config.render_indent), encoding="utf-8"
        )
        console.print(f"Snapshot written to {output}")


@app.command()
def validate(snapshot: SnapshotArg):
    """Report duplicate ids and dangling links in a snapshot."""
    service = load_service(snapshot)
    duplicates = service.find_duplicate_ids()
    dangling = service.dangling_links()

    for entity_id, entities in sorted(duplicates.items()):
        names = ", ".join(entity.name for entity in entities)
        console.print(f"[red]Duplicate id {entity_id}:[/red] {names}")
    for link in dangling:
        console.print(f"[red]Dangling link:[/red] {link.name}")

    if duplicates or dangling:
        raise typer.Exit(1)
    console.print("[green]Tree is valid[/green]")
