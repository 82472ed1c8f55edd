"""
Type definitions and dataclasses for PDF Combiner.

This module defines the document-independent records the merge engine works
with. Backends translate their native objects into these records when reading
a source and back into native objects when writing the combined output.
"""

from dataclasses import dataclass, field, replace
from typing import Hashable, Iterator, List, Optional, Tuple

PageId = Hashable
Color = Tuple[float, float, float]


@dataclass(frozen=True)
class PageRange:
    """
    Inclusive span of 1-based page numbers.

    Attributes:
        first: First page number (1-based)
        last: Last page number (1-based, inclusive). Zero means "to the end".
    """
    first: int = 1
    last: int = 0

    @property
    def first_index(self) -> int:
        return self.first - 1

    @property
    def last_index(self) -> int:
        return self.last - 1

    @property
    def page_count(self) -> int:
        return self.last - self.first + 1

    def __str__(self) -> str:
        if self.last == 0:
            return f"{self.first}-"
        if self.first == self.last:
            return str(self.first)
        return f"{self.first}-{self.last}"


@dataclass(frozen=True)
class Target:
    """
    Page a bookmark or named destination points at, with its view parameters.

    Attributes:
        page_id: Identifier of the target page within its document
        fit: PDF fit type name (``/Fit``, ``/XYZ``, ``/FitH`` ...)
        zoom: Magnification for ``/XYZ`` targets
        left, top, right, bottom: View rectangle coordinates
    """
    page_id: PageId = None
    fit: str = "/Fit"
    zoom: Optional[float] = None
    left: Optional[float] = None
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None

    def with_page(self, page_id: PageId) -> "Target":
        """Return a copy of this target pointing at ``page_id``."""
        return replace(self, page_id=page_id)


@dataclass
class OutlineEntry:
    """
    Payload of a single bookmark.

    Attributes:
        title: Text shown in the outline panel
        target: Destination of the bookmark, if any
        color: RGB text color with components in 0.0-1.0
        bold: Whether the title is rendered bold
        italic: Whether the title is rendered italic
        is_open: Whether the entry's children are expanded
    """
    title: str
    target: Optional[Target] = None
    color: Optional[Color] = None
    bold: bool = False
    italic: bool = False
    is_open: bool = True

    @property
    def page_id(self) -> Optional[PageId]:
        if self.target is None:
            return None
        return self.target.page_id

    def clone(self, **changes) -> "OutlineEntry":
        return replace(self, **changes)


@dataclass
class OutlineNode:
    """Node of an outline tree. The root node carries no entry."""
    entry: Optional[OutlineEntry] = None
    children: List["OutlineNode"] = field(default_factory=list)

    def add(self, entry: OutlineEntry) -> "OutlineNode":
        node = OutlineNode(entry)
        self.children.append(node)
        return node

    def count(self, recurse: bool = False) -> int:
        if not recurse:
            return len(self.children)
        return sum(1 + child.count(True) for child in self.children)

    def walk(self) -> Iterator["OutlineNode"]:
        """Yield every descendant depth-first, in document order."""
        for child in self.children:
            yield child
            yield from child.walk()


@dataclass(frozen=True)
class NamedDestination:
    """A document-scoped, named link target."""
    name: str
    target: Optional[Target] = None

    @property
    def page_id(self) -> Optional[PageId]:
        if self.target is None:
            return None
        return self.target.page_id

    def renamed(self, name: str) -> "NamedDestination":
        return replace(self, name=name)

    def retargeted(self, target: Target) -> "NamedDestination":
        return replace(self, target=target)


@dataclass(frozen=True)
class OptionalContentGroup:
    """
    A named, independently toggleable visibility unit (a layer).

    Attributes:
        name: Display name of the layer
        ref: Identifier of the group within its source document
        intent: Optional intent name (``/View``, ``/Design``)
        source: Tag of the document the group was merged from
    """
    name: str
    ref: Hashable
    intent: Optional[str] = None
    source: Optional[str] = None

    def clone(self, source: Optional[str]) -> "OptionalContentGroup":
        return replace(self, source=source)


@dataclass
class OrderEntry:
    """
    Entry of a layer ordering tree.

    A group entry references an :class:`OptionalContentGroup` and may own
    nested entries; a non-group entry is a labelled collection of entries.
    """
    group: Optional[OptionalContentGroup] = None
    name: Optional[str] = None
    children: List["OrderEntry"] = field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return self.group is not None


@dataclass
class OptionalContentConfiguration:
    """Default visibility configuration of an optional content container."""
    name: Optional[str] = None
    order: List[OrderEntry] = field(default_factory=list)
    off: List[OptionalContentGroup] = field(default_factory=list)
    list_mode: Optional[str] = None


@dataclass
class OptionalContent:
    """Container of layers plus their default configuration."""
    groups: List[OptionalContentGroup] = field(default_factory=list)
    configuration: OptionalContentConfiguration = field(
        default_factory=OptionalContentConfiguration
    )

    def add_group(self, group: OptionalContentGroup, source: Optional[str] = None) -> OptionalContentGroup:
        cloned = group.clone(source)
        self.groups.append(cloned)
        return cloned


@dataclass
class CombineInput:
    """
    One source document of a combine request.

    Attributes:
        path: Path of the source document
        ranges: Page ranges to copy; empty means the whole document
        destination_range: Restrict named destinations to this page range
        password: Password used to open an encrypted source
    """
    path: str
    ranges: List[PageRange] = field(default_factory=list)
    destination_range: Optional[PageRange] = None
    password: Optional[str] = None


@dataclass
class CombineResult:
    """
    Result of a combine operation.

    Attributes:
        success: Whether the operation was successful
        output_file: Path of the written document
        total_pages: Number of pages in the output
        documents: Number of source documents processed
        bookmarks: Number of bookmarks in the output outline
        named_destinations: Number of named destinations in the output
        layers: Number of optional content groups in the output
        elapsed_seconds: Wall-clock duration of the operation
        error: Error message if operation failed
    """
    success: bool
    output_file: str
    total_pages: int = 0
    documents: int = 0
    bookmarks: int = 0
    named_destinations: int = 0
    layers: int = 0
    elapsed_seconds: float = 0.0
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.success:
            return f"CombineResult(success=True, pages={self.total_pages}, documents={self.documents})"
        return f"CombineResult(success=False, error='{self.error}')"


@dataclass
class DocumentInfo:
    """
    Navigation metadata summary of a single document.

    Attributes:
        path: Path of the document
        num_pages: Number of pages
        file_size: File size in bytes
        bookmarks: Number of outline entries at all levels
        named_destinations: Number of named destinations
        layers: Number of optional content groups
        is_encrypted: Whether the file is encrypted
    """
    path: str
    num_pages: int
    file_size: int
    bookmarks: int = 0
    named_destinations: int = 0
    layers: int = 0
    is_encrypted: bool = False
