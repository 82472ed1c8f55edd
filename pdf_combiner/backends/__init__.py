"""Backend abstractions for PDF Combiner."""

from .base import DocumentBackend, OutputDocument, SourceDocument
from .memory import MemoryBackend, MemoryDocument, MemoryOutputDocument
from .pypdf_backend import PypdfBackend

__all__ = [
    "DocumentBackend",
    "OutputDocument",
    "SourceDocument",
    "MemoryBackend",
    "MemoryDocument",
    "MemoryOutputDocument",
    "PypdfBackend",
]
