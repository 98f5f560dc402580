"""Demo command: build the sample tree and walk through lookups and deletions."""

import typer
from rich.console import Console

from basic_vfs.cli.app import app
from basic_vfs.models import File, Folder

console = Console(soft_wrap=True)


def build_sample_tree() -> Folder:
    """Root "/" with file1, folder2/ (file2) and folder3/ (file3)."""
    root = Folder("/", 1)
    root.add(File("file1", 2))

    folder2 = Folder("folder2/", 3)
    folder2.add(File("file2", 4))
    root.add(folder2)

    root.add(Folder("folder3/", 6, children=[File("file3", 5)]))
    return root


def _report_lookup(label: str, entity) -> None:
    if entity is None:
        console.print(f"Unable to find {label}!")
    else:
        console.print(f"Found {label}: {entity.render()}", markup=False)


@app.command()
def demo(
    cascade: bool = typer.Option(
        False, "--cascade", help="Finish by deleting the whole tree from the root"
    ),
):
    """Build the sample tree and run lookups and deletions against it."""

    def reporter(notice: str) -> None:
        console.print(f"[dim]{notice}[/dim]")

    root = build_sample_tree()
    console.print(f"root: {root.render()}", markup=False)

    _report_lookup("file1", root.get("file1"))
    # grandchildren are only reachable one level at a time
    _report_lookup("file2", root.get("file2"))
    folder2 = root.get_mut("folder2/")
    _report_lookup("file2", folder2.get("file2") if folder2 is not None else None)

    root.delete_id(6, reporter)
    _report_lookup("folder3/", root.get("folder3/"))
    console.print(f"root: {root.render()}", markup=False)

    if cascade:
        root.delete(reporter)
        _report_lookup("file1", root.get("file1"))
