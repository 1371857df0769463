"""
Custom Exceptions for the retrieval-augmented guide.

Exception Hierarchy:
    GuideError (base)
    ├── ClientInputError
    ├── CollaboratorError
    │   ├── EmbeddingError
    │   ├── GenerationError
    │   └── DocumentExtractionError
    └── CorpusError
        ├── EmptyCorpusError
        └── CorpusFormatError

Startup-phase errors (building or loading the corpus) are fatal and end the
process. Per-request errors are reported on that response only.

Usage:
    from common.exceptions import EmptyCorpusError, CollaboratorError

    try:
        store = await CorpusStore.build(raw_text, embedder)
    except EmptyCorpusError as e:
        print(f"Nothing to embed: {e}")
    except CollaboratorError as e:
        print(f"Embedding service failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class GuideError(Exception):
    """
    Base exception for all guide errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "An error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# CLIENT ERRORS
# =============================================================================


class ClientInputError(GuideError):
    """Raised when a chat request lacks a session id or a prompt."""

    def __init__(self, message: str = "sessionId and prompt are required"):
        super().__init__(message)


# =============================================================================
# COLLABORATOR ERRORS
# =============================================================================


class CollaboratorError(GuideError):
    """
    Base class for failures of an external service.

    Attributes:
        service: Name of the failing collaborator
        original_error: The underlying exception
    """

    service = "collaborator"

    def __init__(
        self,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message or f"{self.service} call failed", details)


class EmbeddingError(CollaboratorError):
    """Raised when the embedding service fails or returns unusable vectors."""

    service = "embedding"


class GenerationError(CollaboratorError):
    """Raised when the chat model cannot produce a reply."""

    service = "generation"


class DocumentExtractionError(CollaboratorError):
    """
    Raised when text cannot be extracted from the source document.

    Attributes:
        path: Path to the document
    """

    service = "document extraction"

    def __init__(
        self,
        path: str,
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        super().__init__(
            f"Failed to extract text from document [{path}]",
            original_error,
        )


# =============================================================================
# CORPUS ERRORS
# =============================================================================


class CorpusError(GuideError):
    """Base class for corpus build/load errors. Always fatal at startup."""

    pass


class EmptyCorpusError(CorpusError):
    """Raised when a build or load yields zero usable chunks."""

    def __init__(
        self,
        message: str = "Corpus contains no usable text chunks",
        details: Optional[str] = None,
    ):
        super().__init__(message, details)


class CorpusFormatError(CorpusError):
    """
    Raised when a persisted store is missing or malformed.

    Attributes:
        path: Path of the store file, if known
    """

    def __init__(
        self,
        message: str = "Embeddings file is invalid",
        path: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.path = path
        if path:
            message = f"{message} [{path}]"
        super().__init__(message, details)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def is_fatal_at_startup(error: Exception) -> bool:
    """
    Check whether an error must stop the process during startup.

    Corpus and collaborator errors are fatal while the index is being built
    or loaded: an unready index never serves requests.
    """
    return isinstance(error, (CorpusError, CollaboratorError, OSError))


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
