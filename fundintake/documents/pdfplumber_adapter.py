import io

import pdfplumber

from fundintake.documents.base import BasePdfExtractor, join_pages
from fundintake.documents.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Text extraction with pdfplumber; keeps label/value pairs on one line."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text(x_tolerance=2) or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read the PDF: {exc}") from exc
        text = join_pages(pages)
        if not text:
            raise PdfExtractionError("PDF has no text layer (scanned document?)")
        return text
