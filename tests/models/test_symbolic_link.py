"""Tests for symbolic links."""

import gc

import pytest

from basic_vfs.models import File, Folder, SymbolicLink
from basic_vfs.services.exceptions import (
    AttachError,
    DanglingLinkError,
    ErrorKind,
    UnsupportedOperationError,
)


@pytest.fixture
def linked_root(sample_root):
    sample_root.add_link("alias", 10, sample_root.get("file1"))
    return sample_root


def test_add_link_attaches_link(linked_root):
    link = linked_root.get("alias")
    assert isinstance(link, SymbolicLink)
    assert link.parent is linked_root
    assert link.target is linked_root.get("file1")
    assert link.target_name == "file1"


def test_render_names_target_only(sample_root):
    link = sample_root.add_link("to-folder", 11, sample_root.get("folder2/"))
    assert link.render() == '"to-folder" -> "folder2/"'
    assert sample_root.render().endswith(' "to-folder" -> "folder2/",  }')


def test_lookup_never_dereferences(linked_root):
    link = linked_root.get("alias")
    assert link.get("alias") is link
    assert link.get("file1") is None
    assert linked_root.get("file1") is not link


def test_delete_id_is_unsupported(linked_root, reporter, notices):
    link = linked_root.get("alias")
    with pytest.raises(UnsupportedOperationError) as exc:
        link.delete_id(2, reporter)
    assert exc.value.kind == ErrorKind.UNSUPPORTED
    assert notices == []
    assert not link.target.is_deleted


def test_deleting_link_keeps_target(linked_root, reporter, notices):
    file1 = linked_root.get("file1")

    assert linked_root.delete_id(10, reporter) == 10

    assert notices == ["deleted link alias -> file1"]
    assert linked_root.get("alias") is None
    assert linked_root.get("file1") is file1
    assert not file1.is_deleted


def test_cascade_through_link_keeps_outside_target(sample_root, reporter, notices):
    folder2 = sample_root.get("folder2/")
    file1 = sample_root.get("file1")
    folder2.add_link("shortcut", 12, file1)

    sample_root.delete_id(3, reporter)

    assert notices == [
        "deleted link shortcut -> file1",
        "deleted file file2",
        "deleted folder folder2/",
    ]
    assert sample_root.get("file1") is file1
    assert not file1.is_deleted


class TestDanglingLinks:
    def test_target_deleted(self, linked_root, reporter, notices):
        link = linked_root.get("alias")
        linked_root.delete_id(2, reporter)

        assert link.is_dangling
        with pytest.raises(DanglingLinkError):
            link.target
        with pytest.raises(DanglingLinkError):
            link.render()

        link.delete(reporter)
        assert notices[-1] == "deleted link alias -> file1"

    def test_notice_names_target_destroyed_earlier_in_cascade(self, reporter, notices):
        file2 = File("file2", 4)
        h = Folder("h/", 3, children=[file2])
        # link sits before the folder owning its target, so it is torn down last
        g = Folder("g/", 2, children=[SymbolicLink("alias2", 5, file2), h])

        g.delete(reporter)

        assert notices == [
            "deleted file file2",
            "deleted folder h/",
            "deleted link alias2 -> file2",
            "deleted folder g/",
        ]

    def test_link_does_not_keep_target_alive(self):
        def make_link() -> SymbolicLink:
            return SymbolicLink("orphan", 1, File("temporary", 2))

        link = make_link()
        gc.collect()

        assert link.is_dangling
        with pytest.raises(DanglingLinkError):
            link.target_name

    def test_cannot_link_to_deleted_entity(self, reporter):
        file = File("gone", 1)
        file.delete(reporter)
        with pytest.raises(AttachError):
            SymbolicLink("late", 2, file)

    def test_link_to_link(self, linked_root):
        alias = linked_root.get("alias")
        chained = linked_root.add_link("alias2", 13, alias)
        assert chained.render() == '"alias2" -> "alias"'
        assert isinstance(linked_root.get("alias2"), SymbolicLink)


def test_link_to_folder_never_expands(sample_root):
    holder = sample_root.add(Folder("links/", 20))
    holder.add_link("to-root", 21, sample_root)
    assert holder.render() == '{ "links/": "to-root" -> "/",  }'
