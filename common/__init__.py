"""
Shared error taxonomy and logging setup for the guide services.
"""

from .exceptions import (
    GuideError,
    ClientInputError,
    CollaboratorError,
    EmbeddingError,
    GenerationError,
    DocumentExtractionError,
    CorpusError,
    EmptyCorpusError,
    CorpusFormatError,
    is_fatal_at_startup,
    format_error_chain,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "GuideError",
    "ClientInputError",
    "CollaboratorError",
    "EmbeddingError",
    "GenerationError",
    "DocumentExtractionError",
    "CorpusError",
    "EmptyCorpusError",
    "CorpusFormatError",
    "is_fatal_at_startup",
    "format_error_chain",
    "setup_logging",
    "get_logger",
]
