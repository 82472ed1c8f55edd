from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, TextStringObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_combiner.backends.memory import MemoryBackend, MemoryDocument  # noqa: E402
from pdf_combiner.types import (  # noqa: E402
    NamedDestination,
    OptionalContent,
    OptionalContentConfiguration,
    OptionalContentGroup,
    OrderEntry,
    OutlineEntry,
    OutlineNode,
    Target,
)

# (title, 0-based page index, parent title or None)
BookmarkSpec = Tuple[str, int, Optional[str]]


def outline_for(document: MemoryDocument, bookmarks: Sequence[BookmarkSpec]) -> OutlineNode:
    """Build an outline for ``document``; parents must precede their children."""
    root = OutlineNode()
    nodes: Dict[str, OutlineNode] = {}
    for title, index, parent in bookmarks:
        owner = nodes[parent] if parent else root
        nodes[title] = owner.add(OutlineEntry(title, Target(page_id=document.page_id(index))))
    return root


def layers_for(document: MemoryDocument, names: Sequence[str]) -> OptionalContent:
    groups = [OptionalContentGroup(name, ref=f"{document.name}#{name}") for name in names]
    return OptionalContent(
        groups=groups,
        configuration=OptionalContentConfiguration(order=[OrderEntry(group=group) for group in groups]),
    )


@pytest.fixture()
def memory_document() -> Callable[..., MemoryDocument]:
    def _create(
        name: str,
        pages: int,
        bookmarks: Sequence[BookmarkSpec] = (),
        destinations: Sequence[Tuple[str, int]] = (),
        layers: Sequence[str] = (),
    ) -> MemoryDocument:
        document = MemoryDocument.with_pages(name, pages)
        if bookmarks:
            document.outline = outline_for(document, bookmarks)
        document.destinations = [
            NamedDestination(dest_name, Target(page_id=document.page_id(index)))
            for dest_name, index in destinations
        ]
        if layers:
            document.layers = layers_for(document, layers)
        return document

    return _create


@pytest.fixture()
def scenario_backend(memory_document: Callable[..., MemoryDocument]) -> MemoryBackend:
    """Two documents whose named destinations share the name ``Intro``."""
    backend = MemoryBackend()
    backend.add(memory_document("A.pdf", 3, bookmarks=[("Chapter A", 1, None)], destinations=[("Intro", 0)]))
    backend.add(memory_document("B.pdf", 2, bookmarks=[("Chapter B", 0, None)], destinations=[("Intro", 0)]))
    return backend


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdf-combiner-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str,
        pages: int = 1,
        bookmarks: Sequence[BookmarkSpec] = (),
        destinations: Sequence[Tuple[str, int]] = (),
        layers: Sequence[str] = (),
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)

        parents: Dict[str, object] = {}
        for title, index, parent in bookmarks:
            parents[title] = writer.add_outline_item(title, index, parent=parents.get(parent))

        for name, index in destinations:
            writer.add_named_destination(name, index)

        if layers:
            groups = ArrayObject(
                writer._add_object(DictionaryObject({
                    NameObject("/Type"): NameObject("/OCG"),
                    NameObject("/Name"): TextStringObject(name),
                }))
                for name in layers
            )
            writer.root_object[NameObject("/OCProperties")] = DictionaryObject({
                NameObject("/OCGs"): groups,
                NameObject("/D"): DictionaryObject({
                    NameObject("/Order"): ArrayObject(groups),
                    NameObject("/OFF"): ArrayObject(groups[-1:]),
                }),
            })

        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create
