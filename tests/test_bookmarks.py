from __future__ import annotations

from typing import Callable

from pdf_combiner.backends.memory import MemoryDocument, MemoryOutputDocument
from pdf_combiner.bookmarks import BookmarkTreeNode, build_page_id_map
from pdf_combiner.types import OutlineEntry, OutlineNode, Target


def _titles(node: BookmarkTreeNode) -> list:
    return [child.entry.title for child in node.children]


def test_page_id_map_covers_whole_document(memory_document: Callable[..., MemoryDocument]) -> None:
    document = memory_document("doc.pdf", 3)
    assert build_page_id_map(document) == {"doc:1": 0, "doc:2": 1, "doc:3": 2}


def test_no_outline_builds_empty_tree(memory_document: Callable[..., MemoryDocument]) -> None:
    tree = BookmarkTreeNode.from_document(memory_document("plain.pdf", 4), 0, 3)
    assert tree.children == []
    assert tree.child_count(recurse=True) == 0


def test_descendant_is_pruned_with_out_of_range_ancestor(
    memory_document: Callable[..., MemoryDocument],
) -> None:
    document = memory_document(
        "doc.pdf",
        5,
        bookmarks=[("A", 4, None), ("B", 1, "A"), ("C", 1, None)],
    )

    tree = BookmarkTreeNode.from_document(document, 0, 2)

    assert _titles(tree) == ["C"]
    assert tree.child_count(recurse=True) == 1


def test_nested_bookmarks_in_range_are_kept(memory_document: Callable[..., MemoryDocument]) -> None:
    document = memory_document(
        "doc.pdf",
        4,
        bookmarks=[("Part", 0, None), ("Section", 1, "Part"), ("Appendix", 3, None)],
    )

    tree = BookmarkTreeNode.from_document(document, 0, 1)

    assert _titles(tree) == ["Part"]
    assert _titles(tree.children[0]) == ["Section"]
    assert tree.child_count() == 1
    assert tree.child_count(recurse=True) == 2


def test_entry_without_target_is_pruned(memory_document: Callable[..., MemoryDocument]) -> None:
    document = memory_document("doc.pdf", 2)
    document.outline = OutlineNode()
    document.outline.add(OutlineEntry("Heading only"))

    assert BookmarkTreeNode.from_document(document, 0, 1).child_count() == 0


def test_append_to_translates_targets(memory_document: Callable[..., MemoryDocument]) -> None:
    cover = memory_document("cover.pdf", 2)
    document = memory_document("doc.pdf", 3)
    document.outline = OutlineNode()
    document.outline.add(
        OutlineEntry(
            "Two",
            Target(page_id=document.page_id(1), fit="/XYZ", left=10.0, top=20.0, zoom=1.5),
            color=(1.0, 0.0, 0.0),
            italic=True,
        )
    )

    output = MemoryOutputDocument()
    output.append_pages(cover, range(2))
    output.append_pages(document, range(3))
    root = OutlineNode()

    tree = BookmarkTreeNode.from_document(document, 0, 2)
    emitted = tree.append_to(output, page_delta=2, target_root=root)

    assert emitted == 1
    entry = root.children[0].entry
    assert entry.title == "Two"
    assert entry.target == Target(page_id=output.page_id(3), fit="/XYZ", left=10.0, top=20.0, zoom=1.5)
    assert entry.color == (1.0, 0.0, 0.0)
    assert entry.italic is True
    # the source entry is untouched
    assert document.outline.children[0].entry.target.page_id == "doc:2"


def test_append_to_defaults_to_output_outline(memory_document: Callable[..., MemoryDocument]) -> None:
    document = memory_document("doc.pdf", 2, bookmarks=[("First", 0, None), ("Nested", 1, "First")])
    output = MemoryOutputDocument()
    output.append_pages(document, range(2))

    BookmarkTreeNode.from_document(document, 0, 1).append_to(output, page_delta=0)

    first = output.get_outline().children[0]
    assert first.entry.target.page_id == output.page_id(0)
    assert first.children[0].entry.target.page_id == output.page_id(1)


def test_append_to_skips_unknown_page(memory_document: Callable[..., MemoryDocument]) -> None:
    document = memory_document("doc.pdf", 2)
    output = MemoryOutputDocument()
    output.append_pages(document, range(2))

    tree = BookmarkTreeNode(document)
    ghost = BookmarkTreeNode(document, OutlineEntry("Ghost", Target(page_id="missing")))
    ghost.children.append(BookmarkTreeNode(document, OutlineEntry("Child", Target(page_id="doc:1"))))
    tree.children.append(ghost)
    root = OutlineNode()

    assert tree.append_to(output, 0, root) == 0
    assert root.children == []


def test_append_to_skips_output_index_out_of_range(
    memory_document: Callable[..., MemoryDocument],
) -> None:
    document = memory_document("doc.pdf", 3, bookmarks=[("Last", 2, None)])
    output = MemoryOutputDocument()
    output.append_pages(document, range(2))
    root = OutlineNode()

    tree = BookmarkTreeNode.from_document(document, 0, 2)

    assert tree.append_to(output, 0, root) == 0
    assert root.children == []
