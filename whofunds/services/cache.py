"""
Time-bounded in-memory cache for the politician roster.

One value, one timestamp. Callers pass ``now`` explicitly so tests can move
the clock without patching.
"""
import logging
from datetime import datetime, timedelta
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RosterCache(Generic[T]):
    """
    Holds the last fetched roster for ``ttl``.

    ``set`` overwrites (last writer wins).
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24)):
        self.ttl = ttl
        self._value: Optional[T] = None
        self._stored_at: Optional[datetime] = None

    def get(self, now: Optional[datetime] = None) -> Optional[T]:
        """
        Cached value if it is younger than ``ttl``, else None.
        """
        if self._value is None or self._stored_at is None:
            logger.debug("Roster cache miss: empty")
            return None

        now = now or datetime.utcnow()
        if now - self._stored_at >= self.ttl:
            logger.debug(f"Roster cache expired (stored at {self._stored_at.isoformat()})")
            return None

        logger.debug("Roster cache hit")
        return self._value

    def set(self, value: T, now: Optional[datetime] = None):
        self._value = value
        self._stored_at = now or datetime.utcnow()
        logger.info(f"Roster cached at {self._stored_at.isoformat()}")

    def clear(self):
        self._value = None
        self._stored_at = None

    @property
    def stored_at(self) -> Optional[datetime]:
        return self._stored_at
