"""
Session Memory - time-bounded conversation history per session id

Each session holds an ordered list of turns plus the time it was last read
or written. Entries not touched for ``ttl_seconds`` are dropped, both lazily
on access and by a periodic sweep task so abandoned sessions do not pile up.

Design:
- Plain dict keyed by session id; sessions never interfere with each other
- get() returns a copy, set() replaces the whole list (last writer wins for
  concurrent requests in the same session)
- Injectable monotonic clock for deterministic expiry tests
- Nothing is persisted; a restart clears every session

Usage:
    memory = SessionMemory(ttl_seconds=3600, check_period_seconds=600)
    await memory.start()

    history = memory.get("abc")
    memory.set("abc", history + [Turn.user("Hi"), Turn.model("Hello")])

    await memory.stop()
"""

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from common.logging_config import get_logger

from .models import Turn

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600
DEFAULT_CHECK_PERIOD_SECONDS = 600


@dataclass
class SessionRecord:
    session_id: str
    turns: list[Turn] = field(default_factory=list)
    last_access: float = 0.0


class SessionMemory:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        check_period_seconds: float = DEFAULT_CHECK_PERIOD_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        log: Optional[logging.Logger] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if check_period_seconds < 0:
            raise ValueError(
                f"check_period_seconds must not be negative, got {check_period_seconds}"
            )
        self.ttl_seconds = ttl_seconds
        self.check_period_seconds = check_period_seconds
        self._clock = clock
        self._log = log or logger
        self._records: dict[str, SessionRecord] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, session_id: object) -> bool:
        record = self._records.get(session_id)
        return record is not None and not self._is_expired(record, self._clock())

    def _is_expired(self, record: SessionRecord, now: float) -> bool:
        return now - record.last_access > self.ttl_seconds

    def get(self, session_id: str) -> list[Turn]:
        """Return the session's turns (empty if unknown or expired) and refresh its TTL."""
        now = self._clock()
        record = self._records.get(session_id)
        if record is None:
            return []
        if self._is_expired(record, now):
            del self._records[session_id]
            return []
        record.last_access = now
        return list(record.turns)

    def set(self, session_id: str, turns: Iterable[Turn]) -> None:
        """Replace the session's turns and restart its TTL."""
        self._records[session_id] = SessionRecord(
            session_id=session_id,
            turns=list(turns),
            last_access=self._clock(),
        )

    def delete(self, session_id: str) -> bool:
        return self._records.pop(session_id, None) is not None

    def sweep(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = self._clock()
        expired = [
            session_id
            for session_id, record in self._records.items()
            if self._is_expired(record, now)
        ]
        for session_id in expired:
            del self._records[session_id]
        if expired:
            self._log.debug("Evicted %d expired sessions", len(expired))
        return len(expired)

    @property
    def running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    async def start(self) -> None:
        """Start the periodic sweep task (no-op if disabled or already running)."""
        if self.check_period_seconds == 0 or self.running:
            return
        self._sweeper = asyncio.create_task(self._sweep_forever())

    async def stop(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.check_period_seconds)
            self.sweep()
