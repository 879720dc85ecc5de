from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text of every page, pages separated by a blank line.

        Raises:
            PdfExtractionError: if the PDF cannot be read or has no text layer.
        """


def join_pages(pages: list[str]) -> str:
    """Blank line between pages so a page break also ends a labelled block."""
    return "\n\n".join(page.strip() for page in pages if page.strip())
