"""Bookmark (outline) extraction and re-attachment for combined documents.

A :class:`BookmarkTreeNode` tree is a pruned copy of a source document's
outline, restricted to the bookmarks that point into a selected page span.
The tree is later re-emitted into the output outline with every target moved
to the page's new position.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from .backends.base import OutputDocument, SourceDocument
from .types import OutlineEntry, OutlineNode, PageId

LOGGER = logging.getLogger("pdf_combiner.bookmarks")

PageIdToIndexMap = Dict[PageId, int]


def build_page_id_map(document: SourceDocument) -> PageIdToIndexMap:
    """Map every page id of ``document`` to its 0-based page index."""

    return {document.page_id(index): index for index in range(document.num_pages)}


class BookmarkTreeNode:
    """Pruned outline subtree owned by a single source document.

    The root node wraps no entry. Children are kept in source order; there
    is no back-reference to the parent.
    """

    def __init__(self, document: SourceDocument, entry: Optional[OutlineEntry] = None) -> None:
        self.document = document
        self.entry = entry
        self.children: List[BookmarkTreeNode] = []

    @classmethod
    def from_document(
        cls,
        document: SourceDocument,
        first_index: int,
        last_index: int,
    ) -> "BookmarkTreeNode":
        """Build the tree of bookmarks targeting pages ``first_index..last_index``.

        An entry is kept only when it points into the span, and only then are
        its descendants inspected: a bookmark whose ancestor points outside
        the span is pruned with that ancestor.
        """

        root = cls(document)
        outline = document.outline_root()
        if outline is None:
            return root

        page_ids = document.page_ids(first_index, last_index)
        root._build(outline, page_ids)
        LOGGER.debug(
            "Kept %d bookmark(s) of %s for pages %d-%d",
            root.child_count(recurse=True),
            document.name,
            first_index + 1,
            last_index + 1,
        )
        return root

    def _add_child(self, entry: OutlineEntry) -> "BookmarkTreeNode":
        child = BookmarkTreeNode(self.document, entry)
        self.children.append(child)
        return child

    def _build(self, outline_node: OutlineNode, page_ids: Set[PageId]) -> None:
        for source_child in outline_node.children:
            entry = source_child.entry
            if entry is None or entry.page_id is None or entry.page_id not in page_ids:
                continue
            self._add_child(entry)._build(source_child, page_ids)

    def child_count(self, recurse: bool = False) -> int:
        if not recurse:
            return len(self.children)
        return sum(1 + child.child_count(True) for child in self.children)

    def append_to(
        self,
        target_document: OutputDocument,
        page_delta: int,
        target_root: Optional[OutlineNode] = None,
    ) -> int:
        """Re-emit this tree under ``target_root`` and return the entries emitted.

        ``page_delta`` translates a source page index into an output page
        index. Without ``target_root`` the output document's outline root is
        used.
        """

        if target_root is None:
            target_root = target_document.get_outline()

        page_map = build_page_id_map(self.document)
        return self._copy_children(target_document, page_delta, page_map, target_root)

    def _copy_children(
        self,
        target_document: OutputDocument,
        page_delta: int,
        page_map: PageIdToIndexMap,
        target_root: OutlineNode,
    ) -> int:
        emitted = 0
        for child in self.children:
            entry = child.entry
            if entry is None or entry.target is None:
                continue

            source_index = page_map.get(entry.target.page_id)
            if source_index is None:
                LOGGER.debug("Dropping bookmark '%s': target page no longer exists", entry.title)
                continue

            output_index = source_index + page_delta
            if not 0 <= output_index < target_document.num_pages:
                LOGGER.debug(
                    "Dropping bookmark '%s': output page %d is out of range",
                    entry.title,
                    output_index + 1,
                )
                continue

            target = entry.target.with_page(target_document.page_id(output_index))
            node = target_root.add(entry.clone(target=target))
            emitted += 1 + child._copy_children(target_document, page_delta, page_map, node)
        return emitted


__all__ = ["BookmarkTreeNode", "build_page_id_map", "PageIdToIndexMap"]
