"""
Fixed-length text segmentation.

Splits extracted document text into contiguous, non-overlapping windows of at
most ``max_chunk_length`` characters. Boundaries are not aligned to words or
sentences; joining the segments in order reproduces the input exactly.

Usage:
    from chunking.segmenter import segment

    parts = segment(raw_text, 1500)
    assert "".join(parts) == raw_text
"""

DEFAULT_CHUNK_LENGTH = 1500


def segment(text: str, max_chunk_length: int = DEFAULT_CHUNK_LENGTH) -> list[str]:
    """
    Split text into consecutive slices of at most max_chunk_length characters.

    Args:
        text: The raw text to split.
        max_chunk_length: Maximum characters per segment (must be positive).

    Returns:
        Ordered list of segments; empty for empty input.

    Raises:
        ValueError: If max_chunk_length is not positive.
    """
    if max_chunk_length <= 0:
        raise ValueError(
            f"max_chunk_length must be positive, got {max_chunk_length}"
        )
    return [
        text[start:start + max_chunk_length]
        for start in range(0, len(text), max_chunk_length)
    ]
