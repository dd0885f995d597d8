"""
Time sources for the registry.

Expiry is decided entirely by the injected clock, so tests swap in a
ManualClock and advance it instead of sleeping.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional
import threading


class Clock(ABC):
    """Abstract time source"""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        pass


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """
    Clock that only moves when told to.

    Args:
        start: Initial time (defaults to the current UTC time)
    """

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime.now(timezone.utc)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, seconds: float = 0, minutes: float = 0) -> datetime:
        """Move time forward and return the new current time."""
        with self._lock:
            self._now += timedelta(seconds=seconds, minutes=minutes)
            return self._now

    def set(self, when: datetime) -> None:
        with self._lock:
            self._now = when
