"""
PDF Extractor - selectable text extraction for the corpus builder.

Quick Start:
    from pdf_extractor import TextExtractor

    raw_text = TextExtractor().extract_text("Bhagavad Gita.pdf")
"""

__version__ = "3.0.0"

from .text_extractor import PAGE_SEPARATOR, TextExtractor, extract_text

__all__ = [
    "__version__",
    "PAGE_SEPARATOR",
    "TextExtractor",
    "extract_text",
]
