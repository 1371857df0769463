"""
Chunking component: fixed-length segmentation and text sanitization.

Quick Start:
    from chunking import segment, sanitize

    chunks = [sanitize(part) for part in segment(raw_text, 1500)]
    chunks = [chunk for chunk in chunks if chunk]
"""

__version__ = "1.0.0"

from .sanitizer import is_allowed_char, sanitize
from .segmenter import DEFAULT_CHUNK_LENGTH, segment

__all__ = [
    "__version__",
    "DEFAULT_CHUNK_LENGTH",
    "segment",
    "sanitize",
    "is_allowed_char",
]
