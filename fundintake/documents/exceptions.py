class DocumentError(Exception):
    """Base error for reading paste sources from files."""


class PdfExtractionError(DocumentError):
    """Raised when a PDF cannot be opened or holds no extractable text."""


class UnsupportedDocumentError(DocumentError):
    """Raised for files that are neither text nor PDF."""
