"""
Custom exceptions for PDF Combiner.

Only fatal conditions are modelled as exceptions. Bookmarks or destinations
that cannot be re-targeted are dropped where they are found and never raise.
"""


class PDFCombinerException(Exception):
    """Base exception for all PDF Combiner errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF combiner error occurred."


class InvalidPDFError(PDFCombinerException):
    """Raised when a source document is missing, invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(PDFCombinerException):
    """Raised when a source document is encrypted and cannot be opened."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class UnsupportedFormatError(PDFCombinerException):
    """Raised when a file format is recognised but cannot be processed."""

    @property
    def default_message(self) -> str:
        return "Unsupported document format."


class InvalidRangeError(PDFCombinerException):
    """Raised when a page range specification cannot be parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid page range specification."


class PageOutOfBoundsError(PDFCombinerException):
    """Raised when a page number can never refer to a page."""

    @property
    def default_message(self) -> str:
        return "Requested page number is out of bounds."


class OutputWriteError(PDFCombinerException):
    """Raised when the combined document cannot be written."""

    @property
    def default_message(self) -> str:
        return "Unable to write the combined document."


class EmptyInputError(PDFCombinerException):
    """Raised when there is nothing to combine."""

    @property
    def default_message(self) -> str:
        return "The input file list is empty."
