"""Combining of several documents into one, preserving navigation metadata."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Union

from .backends import PypdfBackend
from .backends.base import DocumentBackend, OutputDocument, SourceDocument
from .bookmarks import BookmarkTreeNode
from .destinations import NamedDestinationRegistry
from .exceptions import EmptyInputError, OutputWriteError, PDFCombinerException
from .layers import LayerMerger
from .ranges import PageOffsetCursor, resolve_page_ranges
from .types import CombineInput, CombineResult, OutlineEntry, OutlineNode, PageId, PageRange, Target

LOGGER = logging.getLogger("pdf_combiner.combine")

DOCUMENT_BOOKMARK_COLOR = (0.09, 0.6, 0.89)

InputLike = Union[CombineInput, str, Path]


@dataclass
class AssemblyItem:
    """A loaded source document and the pages it contributes."""

    document: SourceDocument
    ranges: Sequence[PageRange] = ()
    destination_range: Optional[PageRange] = None


class PDFCombiner:
    """Merge documents page range by page range.

    Bookmarks are pruned to the copied pages and re-attached under one
    bookmark per source document, named destinations are renamed on
    collision, and layers are grouped per source document.
    """

    def __init__(
        self,
        *,
        backend: Optional[DocumentBackend] = None,
        deep_copy: bool = False,
        named_destinations: bool = True,
        layers: bool = True,
        page_mode: Optional[str] = "/UseOutlines",
        seed: Optional[int] = None,
    ) -> None:
        self.backend: DocumentBackend = backend or PypdfBackend()
        self.deep_copy = deep_copy
        self.named_destinations = named_destinations
        self.layers = layers
        self.page_mode = page_mode
        self.seed = seed

    # ------------------------------------------------------------------
    # Core assembly
    # ------------------------------------------------------------------
    def assemble(self, items: Iterable[AssemblyItem]) -> OutputDocument:
        """Build the combined document from ``items`` in order.

        ``items`` may be a lazy iterable; each document is fully processed
        before the next one is requested.
        """

        output = self.backend.new_document()
        outline = OutlineNode()
        registry = NamedDestinationRegistry(seed=self.seed)
        layers = LayerMerger()
        cursor = PageOffsetCursor()

        deep_copy = self.deep_copy and output.supports_deep_copy
        if self.deep_copy and not deep_copy:
            LOGGER.warning("Backend cannot deep copy pages; merging bookmarks instead")

        for item in items:
            document = item.document
            LOGGER.info("Processing '%s'", document.name)

            ranges = resolve_page_ranges(item.ranges, document.num_pages)
            document_start = cursor.offset
            document_node = outline.add(self._document_entry(document))
            page_map: Dict[PageId, PageId] = {}

            for page_range in ranges:
                indices = range(page_range.first_index, page_range.last_index + 1)
                output_ids = output.append_pages(document, indices, deep_copy=deep_copy)
                for index, output_id in zip(indices, output_ids):
                    page_map.setdefault(document.page_id(index), output_id)

                # deep copies carry their bookmarks with the pages
                if not deep_copy:
                    tree = BookmarkTreeNode.from_document(
                        document, page_range.first_index, page_range.last_index
                    )
                    if tree.child_count(recurse=True):
                        tree.append_to(output, cursor.delta_for(page_range), document_node)

                cursor.advance(page_range)

            document_node.entry.target = Target(page_id=output.page_id(document_start))

            if self.named_destinations:
                if item.destination_range is not None:
                    registry.append_range(
                        document,
                        item.destination_range.first,
                        item.destination_range.last,
                        page_map,
                    )
                else:
                    registry.append_all(document, page_map)

            if self.layers:
                layers.append_document_layers(document, document.path.stem)

        output.set_outline(outline)
        if self.named_destinations:
            output.set_named_destinations(registry.destinations)
        if self.layers and layers.document_count:
            output.set_optional_content(layers.get_layers())
        output.set_page_mode(self.page_mode)
        return output

    @staticmethod
    def _document_entry(document: SourceDocument) -> OutlineEntry:
        return OutlineEntry(
            title=document.path.name,
            color=DOCUMENT_BOOKMARK_COLOR,
            bold=True,
        )

    # ------------------------------------------------------------------
    # File level helpers
    # ------------------------------------------------------------------
    def combine(self, inputs: Iterable[InputLike], output_path: Union[str, Path]) -> CombineResult:
        """Combine ``inputs`` into ``output_path`` and describe the result."""

        requests = [self._as_input(item) for item in inputs]
        if not requests:
            raise EmptyInputError("No input documents provided")

        started = time.perf_counter()
        output = self.assemble(self._load(request) for request in requests)
        self.write(output, str(output_path))
        elapsed = time.perf_counter() - started

        content = output.optional_content
        result = CombineResult(
            success=True,
            output_file=str(output_path),
            total_pages=output.num_pages,
            documents=len(requests),
            bookmarks=output.get_outline().count(recurse=True),
            named_destinations=len(output.named_destinations),
            layers=len(content.groups) if content else 0,
            elapsed_seconds=elapsed,
        )
        LOGGER.info(
            "Combined %d document(s) into %s (%d pages)",
            result.documents,
            result.output_file,
            result.total_pages,
        )
        return result

    @staticmethod
    def _as_input(item: InputLike) -> CombineInput:
        if isinstance(item, CombineInput):
            return item
        return CombineInput(path=str(item))

    def _load(self, request: CombineInput) -> AssemblyItem:
        try:
            document = self.backend.load(request.path, password=request.password)
        except PDFCombinerException as exc:
            LOGGER.error("Failed to open %s: %s", request.path, exc)
            raise
        return AssemblyItem(document, request.ranges, request.destination_range)

    def write(self, document: OutputDocument, destination: str) -> None:
        """Persist an assembled document through the backend."""

        try:
            self.backend.write(document, destination)
        except PDFCombinerException:
            raise
        except Exception as exc:
            LOGGER.error("Failed to write combined document to %s: %s", destination, exc)
            raise OutputWriteError(
                f"Unable to write combined document: {destination}. Error: {exc}"
            ) from exc


def combine_pdfs(
    inputs: Iterable[InputLike],
    output: Union[str, Path],
    **options,
) -> CombineResult:
    """Convenience wrapper around :meth:`PDFCombiner.combine`."""

    return PDFCombiner(**options).combine(inputs, output)


__all__ = ["PDFCombiner", "AssemblyItem", "combine_pdfs", "DOCUMENT_BOOKMARK_COLOR"]
