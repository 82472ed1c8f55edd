"""Backend contracts consumed by the merge engine."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence, Set

from ..types import (
    NamedDestination,
    OptionalContent,
    OutlineNode,
    PageId,
)


class SourceDocument:
    """Read side of a loaded document."""

    name: str

    @property
    def num_pages(self) -> int:
        raise NotImplementedError

    @property
    def path(self) -> Path:
        return Path(self.name)

    def page_id(self, index: int) -> PageId:
        raise NotImplementedError

    def get_page(self, index: int) -> object:
        raise NotImplementedError

    def page_ids(self, first_index: int, last_index: int) -> Set[PageId]:
        """Identifiers of the pages at 0-based indices ``first..last``."""
        return {self.page_id(index) for index in range(first_index, last_index + 1)}

    def outline_root(self) -> Optional[OutlineNode]:
        raise NotImplementedError

    def named_destinations(self) -> List[NamedDestination]:
        raise NotImplementedError

    def optional_content(self) -> Optional[OptionalContent]:
        raise NotImplementedError


class OutputDocument:
    """Write side of the combined document.

    Pages are appended as the merge progresses; outline, named destinations
    and optional content are held as plain records until the backend writes
    the document.
    """

    supports_deep_copy: bool = False

    def __init__(self) -> None:
        self.outline: Optional[OutlineNode] = None
        self.named_destinations: List[NamedDestination] = []
        self.optional_content: Optional[OptionalContent] = None
        self.page_mode: Optional[str] = None

    @property
    def num_pages(self) -> int:
        raise NotImplementedError

    def page_id(self, index: int) -> PageId:
        raise NotImplementedError

    def append_pages(
        self,
        source: SourceDocument,
        indices: Iterable[int],
        *,
        deep_copy: bool = False,
    ) -> List[PageId]:
        """Append pages of ``source`` and return the new output page ids."""
        raise NotImplementedError

    def get_outline(self) -> OutlineNode:
        if self.outline is None:
            self.outline = OutlineNode()
        return self.outline

    def set_outline(self, root: OutlineNode) -> None:
        self.outline = root

    def set_named_destinations(self, destinations: Sequence[NamedDestination]) -> None:
        self.named_destinations = list(destinations)

    def set_optional_content(self, content: Optional[OptionalContent]) -> None:
        self.optional_content = content

    def set_page_mode(self, mode: Optional[str]) -> None:
        self.page_mode = mode


class DocumentBackend(Protocol):
    """Protocol defining backend operations for reading and writing documents."""

    def load(self, path: str, password: Optional[str] = None) -> SourceDocument:
        """Load a document and return its source wrapper."""

    def new_document(self) -> OutputDocument:
        """Return an empty output document."""

    def write(self, document: OutputDocument, destination: str) -> None:
        """Persist ``document`` to ``destination``."""
