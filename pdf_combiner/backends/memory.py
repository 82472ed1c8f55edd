"""In-memory document model.

Documents built here behave like loaded files without touching a PDF
library, which makes them handy for exercising the merge engine directly.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..exceptions import InvalidPDFError
from ..types import NamedDestination, OptionalContent, OutlineNode, PageId
from .base import OutputDocument, SourceDocument


@dataclass
class MemoryPage:
    page_id: PageId
    label: str = ""


@dataclass
class MemoryDocument(SourceDocument):
    """A source document held entirely in memory."""

    name: str = ""
    pages: List[MemoryPage] = field(default_factory=list)
    outline: Optional[OutlineNode] = None
    destinations: List[NamedDestination] = field(default_factory=list)
    layers: Optional[OptionalContent] = None

    @classmethod
    def with_pages(cls, name: str, count: int, **kwargs) -> "MemoryDocument":
        """Create a document whose pages are labelled ``<stem>:<number>``."""
        stem = Path(name).stem
        pages = [MemoryPage(f"{stem}:{number}", label=f"{stem} p{number}") for number in range(1, count + 1)]
        return cls(name=name, pages=pages, **kwargs)

    @property
    def num_pages(self) -> int:
        return len(self.pages)

    def page_id(self, index: int) -> PageId:
        return self.pages[index].page_id

    def get_page(self, index: int) -> MemoryPage:
        return self.pages[index]

    def outline_root(self) -> Optional[OutlineNode]:
        return self.outline

    def named_destinations(self) -> List[NamedDestination]:
        return list(self.destinations)

    def optional_content(self) -> Optional[OptionalContent]:
        return self.layers


class MemoryOutputDocument(OutputDocument):
    """Output document collecting copies of source pages."""

    def __init__(self) -> None:
        super().__init__()
        self.pages: List[MemoryPage] = []
        self._ids = itertools.count(1)

    @property
    def num_pages(self) -> int:
        return len(self.pages)

    def page_id(self, index: int) -> PageId:
        return self.pages[index].page_id

    def append_pages(
        self,
        source: SourceDocument,
        indices: Iterable[int],
        *,
        deep_copy: bool = False,
    ) -> List[PageId]:
        appended: List[PageId] = []
        for index in indices:
            page = source.get_page(index)
            copy = MemoryPage(f"out:{next(self._ids)}", label=getattr(page, "label", ""))
            self.pages.append(copy)
            appended.append(copy.page_id)
        return appended

    @property
    def labels(self) -> List[str]:
        return [page.label for page in self.pages]


class MemoryBackend:
    """Backend serving :class:`MemoryDocument` instances by path."""

    def __init__(self, documents: Optional[Dict[str, MemoryDocument]] = None) -> None:
        self.documents: Dict[str, MemoryDocument] = dict(documents or {})
        self.written: Dict[str, MemoryOutputDocument] = {}

    def add(self, document: MemoryDocument) -> MemoryDocument:
        self.documents[document.name] = document
        return document

    def load(self, path: str, password: Optional[str] = None) -> MemoryDocument:
        try:
            return self.documents[str(path)]
        except KeyError:
            raise InvalidPDFError(f"PDF file not found: {path}") from None

    def new_document(self) -> MemoryOutputDocument:
        return MemoryOutputDocument()

    def write(self, document: MemoryOutputDocument, destination: str) -> None:
        self.written[str(destination)] = document


__all__ = [
    "MemoryPage",
    "MemoryDocument",
    "MemoryOutputDocument",
    "MemoryBackend",
]
