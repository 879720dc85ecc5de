import pytest

from fundintake.config.settings import Settings
from fundintake.documents.factory import DocumentLoaderFactory
from fundintake.documents.loader import DocumentLoader
from fundintake.documents.pdfplumber_adapter import PdfPlumberAdapter
from fundintake.documents.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDocumentLoaderFactory:
    @pytest.mark.parametrize(
        ("engine", "adapter_cls"),
        [("pdfplumber", PdfPlumberAdapter), ("PyMuPDF", PyMuPdfAdapter)],
    )
    def test_creates_loader(self, engine: str, adapter_cls: type) -> None:
        loader = DocumentLoaderFactory.create(_make_settings(pdf_engine=engine))

        assert isinstance(loader, DocumentLoader)
        assert isinstance(loader._pdf_extractor, adapter_cls)

    def test_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine 'tesseract'"):
            DocumentLoaderFactory.create(_make_settings(pdf_engine="tesseract"))
