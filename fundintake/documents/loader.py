from pathlib import Path
from typing import BinaryIO

from fundintake.documents.base import BasePdfExtractor
from fundintake.documents.exceptions import DocumentError, UnsupportedDocumentError
from fundintake.logging.logger import Log

PDF_MAGIC = b"%PDF-"
TEXT_SUFFIXES = frozenset({".txt", ".text", ".md", ""})


class DocumentLoader:
    """Reads paste sources: plain text or PDF, from a path or a binary stream."""

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def load_path(self, path: Path) -> str:
        """Raises DocumentError when the file is missing, unreadable or unsupported."""
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DocumentError(f"Cannot read {path}: {exc}") from exc
        if not data.startswith(PDF_MAGIC) and path.suffix.lower() not in TEXT_SUFFIXES:
            raise UnsupportedDocumentError(
                f"Unsupported file type '{path.suffix}'. Use a text file or a PDF."
            )
        Log.debug("Loading paste source", path=str(path), size=len(data))
        return self.load_bytes(data)

    def load_stream(self, stream: BinaryIO) -> str:
        return self.load_bytes(stream.read())

    def load_bytes(self, data: bytes) -> str:
        if data.startswith(PDF_MAGIC):
            return self._pdf_extractor.extract(data)
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise UnsupportedDocumentError("Text input is not valid UTF-8") from exc
