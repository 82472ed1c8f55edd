"""
PDF Combiner - Combine PDF files while keeping their navigation metadata.

Pages are copied range by range from each source. Bookmarks pointing at
copied pages are re-attached under one bookmark per source document, named
destinations are carried over and renamed when two sources use the same name,
and layers (optional content groups) are grouped per source document.

Quick Start:
    >>> from pdf_combiner import combine_pdfs, CombineInput, PageRange
    >>> combine_pdfs(
    ...     [CombineInput("a.pdf", ranges=[PageRange(1, 3)]), "b.pdf"],
    ...     "combined.pdf",
    ... )

Main Classes:
    - PDFCombiner: Drives the combine operation
    - BookmarkTreeNode: Pruned bookmark subtree of one source document
    - NamedDestinationRegistry: Collision-free named destination list
    - LayerMerger: Per-document grouping of optional content

For CLI usage, use the 'pdf-combiner' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF Combiner CLI Contributors"
__license__ = "MIT"

# Core classes
from pdf_combiner.combiner import PDFCombiner, AssemblyItem, combine_pdfs
from pdf_combiner.bookmarks import BookmarkTreeNode
from pdf_combiner.destinations import NamedDestinationRegistry
from pdf_combiner.layers import LayerMerger
from pdf_combiner.ranges import PageOffsetCursor, parse_range_spec, resolve_page_ranges

# Data types
from pdf_combiner.types import (
    PageRange,
    Target,
    OutlineEntry,
    OutlineNode,
    NamedDestination,
    OptionalContentGroup,
    OptionalContent,
    CombineInput,
    CombineResult,
    DocumentInfo,
)

# Exceptions
from pdf_combiner.exceptions import (
    PDFCombinerException,
    InvalidPDFError,
    EncryptedPDFError,
    UnsupportedFormatError,
    InvalidRangeError,
    PageOutOfBoundsError,
    OutputWriteError,
    EmptyInputError,
)

# Utility functions
from pdf_combiner.utils import get_document_info, format_file_size

__all__ = [
    # Main classes
    "PDFCombiner",
    "AssemblyItem",
    "BookmarkTreeNode",
    "NamedDestinationRegistry",
    "LayerMerger",
    "PageOffsetCursor",
    "combine_pdfs",
    "parse_range_spec",
    "resolve_page_ranges",
    # Data types
    "PageRange",
    "Target",
    "OutlineEntry",
    "OutlineNode",
    "NamedDestination",
    "OptionalContentGroup",
    "OptionalContent",
    "CombineInput",
    "CombineResult",
    "DocumentInfo",
    # Exceptions
    "PDFCombinerException",
    "InvalidPDFError",
    "EncryptedPDFError",
    "UnsupportedFormatError",
    "InvalidRangeError",
    "PageOutOfBoundsError",
    "OutputWriteError",
    "EmptyInputError",
    # Utility functions
    "get_document_info",
    "format_file_size",
    # Version info
    "__version__",
]
