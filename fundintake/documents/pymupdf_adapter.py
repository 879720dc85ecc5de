import pymupdf

from fundintake.documents.base import BasePdfExtractor, join_pages
from fundintake.documents.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Text extraction with PyMuPDF, in reading order."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text("text", sort=True) for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read the PDF: {exc}") from exc
        text = join_pages(pages)
        if not text:
            raise PdfExtractionError("PDF has no text layer (scanned document?)")
        return text
