"""pypdf backend implementation for PDF Combiner."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pypdf import PdfReader, PdfWriter
from pypdf.constants import OutlineFontFlag
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    Fit,
    IndirectObject,
    NameObject,
    NumberObject,
    TextStringObject,
    is_null_or_none,
)
from pypdf.generic import Destination as PdfDestination

from ..exceptions import EncryptedPDFError, InvalidPDFError
from ..types import (
    NamedDestination,
    OptionalContent,
    OptionalContentConfiguration,
    OptionalContentGroup,
    OrderEntry,
    OutlineEntry,
    OutlineNode,
    PageId,
    Target,
)
from .base import DocumentBackend, OutputDocument, SourceDocument

# Order of the view arguments stored in a destination array, per fit type.
FIT_ARGUMENTS = {
    "/XYZ": ("left", "top", "zoom"),
    "/Fit": (),
    "/FitB": (),
    "/FitH": ("top",),
    "/FitBH": ("top",),
    "/FitV": ("left",),
    "/FitBV": ("left",),
    "/FitR": ("left", "bottom", "right", "top"),
}


def _number(value: object) -> Optional[float]:
    if is_null_or_none(value):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _resolve(value: object) -> object:
    if isinstance(value, IndirectObject):
        return value.get_object()
    return value


def _fit_for(target: Target) -> Fit:
    arguments = FIT_ARGUMENTS.get(target.fit)
    if arguments is None:
        return Fit.fit()
    return Fit(target.fit, tuple(getattr(target, name) for name in arguments))


@dataclass
class PypdfSourceDocument(SourceDocument):
    name: str
    reader: PdfReader
    raw_bytes: bytes = field(default=b"", repr=False)
    _page_ids: Optional[List[int]] = field(default=None, init=False, repr=False)

    @property
    def num_pages(self) -> int:
        return len(self.reader.pages)

    @property
    def file_size(self) -> int:
        return len(self.raw_bytes)

    @property
    def is_encrypted(self) -> bool:
        return self.reader.is_encrypted

    def page_id(self, index: int) -> PageId:
        if self._page_ids is None:
            self._page_ids = [page.indirect_reference.idnum for page in self.reader.pages]
        return self._page_ids[index]

    def get_page(self, index: int) -> object:
        return self.reader.pages[index]

    # ------------------------------------------------------------------
    # Outline
    # ------------------------------------------------------------------
    def outline_root(self) -> Optional[OutlineNode]:
        items = self.reader.outline
        if not items:
            return None
        root = OutlineNode()
        self._read_outline(items, root)
        return root

    def _read_outline(self, items: Iterable[object], parent: OutlineNode) -> None:
        for item in items:
            if isinstance(item, list):
                # a nested list holds the children of the preceding item
                owner = parent.children[-1] if parent.children else parent
                self._read_outline(item, owner)
            elif item is not None:
                parent.add(self._outline_entry(item))

    def _outline_entry(self, item: PdfDestination) -> OutlineEntry:
        color = item.get("/C")
        flags = int(item.get("/F", 0) or 0)
        count = item.get("/Count")
        return OutlineEntry(
            title=str(item.title or ""),
            target=self._target(item),
            color=tuple(float(c) for c in color) if color is not None and len(color) == 3 else None,
            bold=bool(flags & OutlineFontFlag.bold),
            italic=bool(flags & OutlineFontFlag.italic),
            is_open=count is None or int(count) >= 0,
        )

    def _target(self, destination: PdfDestination) -> Optional[Target]:
        page_id = self._resolve_page(destination.get("/Page"))
        if page_id is None:
            return None
        return Target(
            page_id=page_id,
            fit=str(destination.get("/Type") or "/Fit"),
            zoom=_number(destination.get("/Zoom")),
            left=_number(destination.get("/Left")),
            top=_number(destination.get("/Top")),
            right=_number(destination.get("/Right")),
            bottom=_number(destination.get("/Bottom")),
        )

    def _resolve_page(self, page: object) -> Optional[PageId]:
        if is_null_or_none(page):
            return None
        if isinstance(page, IndirectObject):
            return page.idnum
        if isinstance(page, NumberObject):
            index = int(page)
            if 0 <= index < self.num_pages:
                return self.page_id(index)
            return None
        reference = getattr(page, "indirect_reference", None)
        return reference.idnum if reference is not None else None

    # ------------------------------------------------------------------
    # Named destinations
    # ------------------------------------------------------------------
    def named_destinations(self) -> List[NamedDestination]:
        return [
            NamedDestination(str(name), self._target(destination))
            for name, destination in self.reader.named_destinations.items()
        ]

    # ------------------------------------------------------------------
    # Optional content
    # ------------------------------------------------------------------
    def optional_content(self) -> Optional[OptionalContent]:
        properties = self.reader.root_object.get("/OCProperties")
        if is_null_or_none(properties):
            return None
        properties = properties.get_object()

        groups: Dict[int, OptionalContentGroup] = {}
        content = OptionalContent()
        for reference in _resolve(properties.get("/OCGs", ArrayObject())):
            if not isinstance(reference, IndirectObject):
                continue
            group_object = reference.get_object()
            intent = group_object.get("/Intent")
            group = OptionalContentGroup(
                name=str(group_object.get("/Name", "")),
                ref=reference,
                intent=str(intent) if isinstance(intent, NameObject) else None,
            )
            groups[reference.idnum] = group
            content.groups.append(group)

        defaults = properties.get("/D")
        if not is_null_or_none(defaults):
            defaults = defaults.get_object()
            list_mode = defaults.get("/ListMode")
            name = defaults.get("/Name")
            content.configuration = OptionalContentConfiguration(
                name=str(name) if name is not None else None,
                order=self._read_order(_resolve(defaults.get("/Order", ArrayObject())), groups),
                off=[
                    groups[reference.idnum]
                    for reference in _resolve(defaults.get("/OFF", ArrayObject()))
                    if isinstance(reference, IndirectObject) and reference.idnum in groups
                ],
                list_mode=str(list_mode).lstrip("/") if list_mode is not None else None,
            )
        return content

    def _read_order(self, items: Iterable[object], groups: Dict[int, OptionalContentGroup]) -> List[OrderEntry]:
        entries: List[OrderEntry] = []
        for item in items:
            if isinstance(item, IndirectObject):
                group = groups.get(item.idnum)
                if group is not None:
                    entries.append(OrderEntry(group=group))
                    continue
                item = item.get_object()
            if not isinstance(item, list):
                continue

            if item and isinstance(item[0], (TextStringObject, ByteStringObject)):
                entries.append(OrderEntry(name=str(item[0]), children=self._read_order(item[1:], groups)))
            elif entries and entries[-1].is_group and not entries[-1].children:
                entries[-1].children = self._read_order(item, groups)
            else:
                entries.append(OrderEntry(children=self._read_order(item, groups)))
        return entries


class PypdfOutputDocument(OutputDocument):
    supports_deep_copy = True

    def __init__(self, writer: Optional[PdfWriter] = None) -> None:
        super().__init__()
        self.writer = writer or PdfWriter()

    @property
    def num_pages(self) -> int:
        return len(self.writer.pages)

    def page_id(self, index: int) -> PageId:
        return self.writer.pages[index].indirect_reference.idnum

    def append_pages(
        self,
        source: SourceDocument,
        indices: Iterable[int],
        *,
        deep_copy: bool = False,
    ) -> List[PageId]:
        if not isinstance(source, PypdfSourceDocument):
            raise TypeError(f"Cannot copy pages from {type(source).__name__}")

        indices = list(indices)
        start = self.num_pages
        if deep_copy:
            self.writer.append(source.reader, pages=indices, import_outline=True)
        else:
            for index in indices:
                self.writer.add_page(source.reader.pages[index])
        return [self.page_id(index) for index in range(start, self.num_pages)]


class PypdfBackend(DocumentBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, path: str, password: Optional[str] = None) -> PypdfSourceDocument:
        pdf_path = Path(path)
        if not pdf_path.exists() or not pdf_path.is_file():
            raise InvalidPDFError(f"PDF file not found: {path}")

        try:
            raw_bytes = pdf_path.read_bytes()
        except OSError as exc:
            raise InvalidPDFError(f"Unable to read PDF file: {path}. Error: {exc}") from exc

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF file: {path}. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF: {path}. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        if len(reader.pages) == 0:
            raise InvalidPDFError(f"PDF has no pages: {path}")

        return PypdfSourceDocument(name=str(path), reader=reader, raw_bytes=raw_bytes)

    def new_document(self) -> PypdfOutputDocument:
        return PypdfOutputDocument()

    def write(self, document: PypdfOutputDocument, destination: str) -> None:
        writer = document.writer
        page_index = {document.page_id(index): index for index in range(document.num_pages)}

        if document.outline is not None:
            self._write_outline(writer, document.outline, None, page_index)

        self._write_named_destinations(writer, document.named_destinations, page_index)

        if document.optional_content is not None:
            self._write_optional_content(writer, document.optional_content)

        if document.page_mode:
            writer.page_mode = document.page_mode

        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('wb') as handle:
            writer.write(handle)

    def _write_outline(
        self,
        writer: PdfWriter,
        node: OutlineNode,
        parent: Optional[IndirectObject],
        page_index: Dict[PageId, int],
    ) -> None:
        for child in node.children:
            entry = child.entry
            if entry is None:
                continue
            page_number = None
            fit = Fit.fit()
            if entry.target is not None:
                page_number = page_index.get(entry.target.page_id)
                fit = _fit_for(entry.target)
            reference = writer.add_outline_item(
                entry.title,
                page_number,
                parent=parent,
                color=entry.color,
                bold=entry.bold,
                italic=entry.italic,
                fit=fit,
                is_open=entry.is_open,
            )
            self._write_outline(writer, child, reference, page_index)

    def _write_named_destinations(
        self,
        writer: PdfWriter,
        destinations: Iterable[NamedDestination],
        page_index: Dict[PageId, int],
    ) -> None:
        # page copies made by PdfWriter.append bring their own names along
        root = writer.root_object
        if "/Names" in root:
            names = root["/Names"]
            if "/Dests" in names:
                del names[NameObject("/Dests")]

        for destination in destinations:
            if destination.target is None:
                continue
            index = page_index.get(destination.target.page_id)
            if index is None:
                continue
            writer.add_named_destination_object(
                PdfDestination(
                    destination.name,
                    writer.pages[index].indirect_reference,
                    _fit_for(destination.target),
                )
            )

    def _write_optional_content(self, writer: PdfWriter, content: OptionalContent) -> None:
        references: Dict[object, IndirectObject] = {}
        groups = ArrayObject()
        for group in content.groups:
            reference = self._group_reference(writer, group)
            references[group.ref] = reference
            groups.append(reference)

        configuration = content.configuration
        defaults = DictionaryObject({
            NameObject("/Order"): self._order_array(configuration.order, references),
        })
        if configuration.name:
            defaults[NameObject("/Name")] = TextStringObject(configuration.name)
        off = ArrayObject(
            references[group.ref] for group in configuration.off if group.ref in references
        )
        if off:
            defaults[NameObject("/OFF")] = off
        if configuration.list_mode:
            defaults[NameObject("/ListMode")] = NameObject(f"/{configuration.list_mode}")

        writer.root_object[NameObject("/OCProperties")] = DictionaryObject({
            NameObject("/OCGs"): groups,
            NameObject("/D"): defaults,
        })

    @staticmethod
    def _group_reference(writer: PdfWriter, group: OptionalContentGroup) -> IndirectObject:
        if isinstance(group.ref, IndirectObject):
            # resolves to the copy made when a page using the group was added
            return group.ref.clone(writer)
        group_object = DictionaryObject({
            NameObject("/Type"): NameObject("/OCG"),
            NameObject("/Name"): TextStringObject(group.name),
        })
        if group.intent:
            group_object[NameObject("/Intent")] = NameObject(group.intent)
        return writer._add_object(group_object)

    def _order_array(self, entries: Iterable[OrderEntry], references: Dict[object, IndirectObject]) -> ArrayObject:
        array = ArrayObject()
        for entry in entries:
            if entry.is_group:
                reference = references.get(entry.group.ref)
                if reference is None:
                    continue
                array.append(reference)
                if entry.children:
                    array.append(self._order_array(entry.children, references))
            else:
                nested = self._order_array(entry.children, references)
                if entry.name is not None:
                    nested.insert(0, TextStringObject(entry.name))
                array.append(nested)
        return array


__all__ = ["PypdfBackend", "PypdfSourceDocument", "PypdfOutputDocument", "FIT_ARGUMENTS"]
