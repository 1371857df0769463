"""
Session component: short-term conversation memory with expiry.
"""

__version__ = "1.0.0"

from .memory import (
    DEFAULT_CHECK_PERIOD_SECONDS,
    DEFAULT_TTL_SECONDS,
    SessionMemory,
    SessionRecord,
)
from .models import Role, Turn

__all__ = [
    "__version__",
    "SessionMemory",
    "SessionRecord",
    "Role",
    "Turn",
    "DEFAULT_TTL_SECONDS",
    "DEFAULT_CHECK_PERIOD_SECONDS",
]
