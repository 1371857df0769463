"""
Text-native PDF extraction.

Extracts the selectable text of every page (via PyMuPDF) in reading order and
joins the pages into one string for the corpus builder. No cleanup happens
here; sanitization runs per chunk in the chunking package.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import fitz  # PyMuPDF

from common.exceptions import DocumentExtractionError
from common.logging_config import get_logger

logger = get_logger(__name__)

PAGE_SEPARATOR = "\n\n"


class TextExtractor:
    def __init__(self, sort_blocks: bool = True, page_separator: str = PAGE_SEPARATOR) -> None:
        self.sort_blocks = sort_blocks
        self.page_separator = page_separator

    def extract_text(self, pdf_path: str | Path) -> str:
        path = Path(pdf_path)
        if not path.exists():
            raise DocumentExtractionError(
                str(path), FileNotFoundError(f"No such file: {path}")
            )
        try:
            with fitz.open(path) as doc:
                pages = [page.get_text("text", sort=self.sort_blocks) for page in doc]
        except Exception as e:
            raise DocumentExtractionError(str(path), e) from e

        logger.info("Extracted %d pages from %s", len(pages), path.name)
        return self.page_separator.join(pages)

    async def extract_text_async(self, pdf_path: str | Path) -> str:
        return await asyncio.to_thread(self.extract_text, pdf_path)


def extract_text(pdf_path: str | Path) -> str:
    """Convenience wrapper around TextExtractor().extract_text()."""
    return TextExtractor().extract_text(pdf_path)
