"""Tests for pdf_extractor.text_extractor — PyMuPDF text extraction."""

import asyncio

import fitz
import pytest

from common.exceptions import DocumentExtractionError
from pdf_extractor import TextExtractor, extract_text


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "gita.pdf"
    doc = fitz.open()
    for line in ("Perform your duty without attachment.", "The self is eternal."):
        page = doc.new_page()
        page.insert_text((72, 72), line)
    doc.save(str(path))
    doc.close()
    return path


class TestExtractText:
    def test_all_pages_in_order(self, pdf_path):
        text = TextExtractor().extract_text(pdf_path)
        first = text.index("Perform your duty without attachment.")
        second = text.index("The self is eternal.")
        assert first < second

    def test_module_function(self, pdf_path):
        assert "eternal" in extract_text(pdf_path)

    def test_async(self, pdf_path):
        text = asyncio.run(TextExtractor().extract_text_async(pdf_path))
        assert "duty" in text

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentExtractionError) as exc_info:
            TextExtractor().extract_text(tmp_path / "missing.pdf")
        assert exc_info.value.path.endswith("missing.pdf")

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"definitely not a pdf")
        with pytest.raises(DocumentExtractionError):
            TextExtractor().extract_text(path)
