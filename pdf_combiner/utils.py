"""Utility functions for command-line argument handling and document inspection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .backends import PypdfBackend
from .backends.base import DocumentBackend
from .exceptions import InvalidPDFError, UnsupportedFormatError
from .ranges import parse_range_spec
from .types import CombineInput, DocumentInfo, PageRange

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Formats recognised by extension; only PDF can be combined.
DOCUMENT_FORMATS = {
    ".pdf": "PDF",
    ".xps": "XPS",
    ".pxl": "PCL/XL",
    ".pcl": "PCL5",
}
SUPPORTED_EXTENSIONS = frozenset({".pdf"})
FILE_LIST_EXTENSION = ".txt"
OUTPUT_MODIFIER = "o"
DEFAULT_OUTPUT_STEM = "Combined"

_ARGUMENT_RE = re.compile(r"^(?P<path>.*\.[A-Za-z0-9]+)/(?P<modifier>[^/.]*)$")


def get_logger(name: str = "pdf_combiner", level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger, attaching a console handler once."""

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger


@dataclass
class SourceArgument:
    """A command-line source split into path and modifier."""

    path: str
    extension: str
    ranges: List[PageRange] = field(default_factory=list)
    modifier: str = ""

    @property
    def is_output(self) -> bool:
        return self.modifier.lower() == OUTPUT_MODIFIER

    @property
    def is_file_list(self) -> bool:
        return self.extension == FILE_LIST_EXTENSION

    @property
    def is_document(self) -> bool:
        return self.extension in DOCUMENT_FORMATS


def split_argument(argument: str) -> SourceArgument:
    """
    Split ``path.ext[/modifier]`` into its parts.

    The modifier is either ``o`` (the argument names the output file) or a
    page range specification such as ``1-3;7;9-``.

    Args:
        argument: Raw command-line argument

    Returns:
        SourceArgument with the lower-cased extension and parsed ranges
    """
    path, modifier = argument, ""
    match = _ARGUMENT_RE.match(argument)
    if match:
        suffix = Path(match.group("path")).suffix.lower()
        if suffix in DOCUMENT_FORMATS or suffix == FILE_LIST_EXTENSION:
            path, modifier = match.group("path"), match.group("modifier")

    source = SourceArgument(path=path, extension=Path(path).suffix.lower(), modifier=modifier)
    if modifier and not source.is_output:
        source.ranges = parse_range_spec(modifier)
    return source


def read_file_list(list_path: Union[str, Path]) -> List[str]:
    """Read document paths from a UTF-8 list file, stopping at the first empty line."""

    paths: List[str] = []
    try:
        with open(list_path, encoding="utf-8-sig") as handle:
            for line in handle:
                line = line.rstrip("\r\n")
                if not line:
                    break
                paths.append(line)
    except OSError as exc:
        raise InvalidPDFError(f"Unable to read file list: {list_path}. Error: {exc}") from exc
    return paths


def check_format(path: Union[str, Path]) -> str:
    """Return the format name of ``path`` or raise if it cannot be combined."""

    extension = Path(path).suffix.lower()
    if extension not in DOCUMENT_FORMATS:
        raise UnsupportedFormatError(f"Unrecognised document format: {path}")
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"{DOCUMENT_FORMATS[extension]} documents are not supported: {path}"
        )
    return DOCUMENT_FORMATS[extension]


def default_output_path(extension: str = ".pdf", directory: Union[str, Path] = ".") -> Path:
    """First of ``Combined<ext>``, ``Combined1<ext>``, ... that does not exist yet."""

    directory = Path(directory)
    candidate = directory / f"{DEFAULT_OUTPUT_STEM}{extension}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{DEFAULT_OUTPUT_STEM}{counter}{extension}"
        counter += 1
    return candidate


@dataclass
class CombinePlan:
    """Inputs and output gathered from the command line."""

    inputs: List[CombineInput] = field(default_factory=list)
    output: Optional[str] = None
    ignored: List[str] = field(default_factory=list)


def build_combine_plan(arguments: Sequence[str]) -> CombinePlan:
    """
    Turn raw ``combine`` arguments into a :class:`CombinePlan`.

    A ``.txt`` argument contributes every path it lists and sets the output
    to the list's name with a ``.pdf`` extension; the document argument right
    after it, if any, overrides that output. Arguments that are neither
    documents nor lists are collected in ``ignored``.
    """
    plan = CombinePlan()
    expect_output = False

    for raw in arguments:
        argument = split_argument(raw)

        if argument.is_file_list:
            plan.inputs.extend(CombineInput(path=path) for path in read_file_list(argument.path))
            plan.output = str(Path(argument.path).with_suffix(".pdf"))
            expect_output = True
            continue

        if not argument.is_document:
            plan.ignored.append(raw)
            continue

        if argument.is_output or expect_output:
            plan.output = argument.path
            expect_output = False
            continue

        plan.inputs.append(CombineInput(path=argument.path, ranges=argument.ranges))

    return plan


def get_document_info(
    path: Union[str, Path],
    password: Optional[str] = None,
    backend: Optional[DocumentBackend] = None,
) -> DocumentInfo:
    """Summarise the navigation metadata of a single document."""

    backend = backend or PypdfBackend()
    document = backend.load(str(path), password=password)
    outline = document.outline_root()
    content = document.optional_content()
    return DocumentInfo(
        path=str(path),
        num_pages=document.num_pages,
        file_size=getattr(document, "file_size", 0),
        bookmarks=outline.count(recurse=True) if outline else 0,
        named_destinations=len(document.named_destinations()),
        layers=len(content.groups) if content else 0,
        is_encrypted=bool(getattr(document, "is_encrypted", False)),
    )


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 B")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
