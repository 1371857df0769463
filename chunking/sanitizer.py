"""
Text sanitization applied before vectorization.

PDF extraction leaves control characters, private-use glyphs and other binary
noise in the text. Only human-readable characters of any script survive:
letters, numbers, punctuation, space separators and the \\n, \\r, \\t controls.
"""

import re
import unicodedata

_KEPT_CONTROLS = frozenset("\n\r\t")
_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_PARAGRAPH_BREAK_RE = re.compile(r"\n{3,}")


def is_allowed_char(char: str) -> bool:
    """Return True if the character belongs to the readable character class."""
    if char in _KEPT_CONTROLS:
        return True
    category = unicodedata.category(char)
    return category[0] in ("L", "N", "P") or category == "Zs"


def sanitize(text: str) -> str:
    """
    Strip noise characters and normalize whitespace.

    Disallowed characters become spaces, runs of spaces/tabs collapse to a
    single space, three or more newlines collapse to a paragraph break, and
    the result is trimmed. sanitize(sanitize(x)) == sanitize(x).
    """
    if not text:
        return ""
    cleaned = "".join(char if is_allowed_char(char) else " " for char in text)
    cleaned = _HORIZONTAL_WS_RE.sub(" ", cleaned)
    cleaned = _PARAGRAPH_BREAK_RE.sub("\n\n", cleaned)
    return cleaned.strip()
