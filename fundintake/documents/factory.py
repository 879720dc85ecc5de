from fundintake.config.settings import Settings
from fundintake.documents.base import BasePdfExtractor
from fundintake.documents.loader import DocumentLoader
from fundintake.documents.pdfplumber_adapter import PdfPlumberAdapter
from fundintake.documents.pymupdf_adapter import PyMuPdfAdapter


class DocumentLoaderFactory:
    """Creates a document loader with the PDF engine chosen in settings."""

    PDF_ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> DocumentLoader:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ENGINES.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return DocumentLoader(pdf_extractor=adapter_cls())
