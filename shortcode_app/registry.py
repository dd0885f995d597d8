"""
Shortcode registry: the authoritative in-memory store of short URLs.

Every public operation runs under one re-entrant lock and starts by pruning
records whose `expires_at` has passed. Pruning is lazy (no background timer),
so a single call may pay for all records that expired since the previous one.
If that ever matters, an expiry-ordered index (heap keyed by `expires_at`)
can replace the linear scan in `_prune` without changing this interface.

Records handed out are deep copies; the registry is the only holder of the
live objects.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional
import logging
import threading

from shortcode_app.clock import Clock, SystemClock
from shortcode_app.events.strategies import EventSink, NullEventSink, emit
from shortcode_app.exceptions import (
    DuplicateShortcodeError,
    InvalidValidityError,
    PersistenceError,
    ShortcodeExpiredError,
    ShortcodeNotFoundError,
)
from shortcode_app.models.url import AccessEvent, UrlRecord
from shortcode_app.services.validators import is_valid_validity
from shortcode_app.storage.strategies import NullPersistence, PersistenceStrategy

logger = logging.getLogger(__name__)


class Registry:
    """
    Thread-safe mapping of shortcode -> UrlRecord.

    Args:
        persistence: Where snapshots are loaded from and flushed to
        clock: Time source deciding creation and expiry
        events: Diagnostic sink
    """

    def __init__(
        self,
        persistence: Optional[PersistenceStrategy] = None,
        clock: Optional[Clock] = None,
        events: Optional[EventSink] = None,
    ):
        self.persistence = persistence or NullPersistence()
        self.clock = clock or SystemClock()
        self.events = events or NullEventSink()
        self._records: Dict[str, UrlRecord] = {}
        self._lock = threading.RLock()
        self._flush_lock = threading.Lock()
        self._load()

    def _emit(self, level: str, message: str, **data) -> None:
        emit(self.events, level, message, **data)

    # Startup

    def _load(self) -> None:
        try:
            records = self.persistence.load()
        except PersistenceError as e:
            self._emit("error", "Failed to load shortened URLs from storage", error=str(e))
            return

        with self._lock:
            for record in records:
                # Later duplicates win, same as replaying inserts in order
                self._records.pop(record.shortcode, None)
                self._records[record.shortcode] = record
        logger.debug("Loaded %d records", len(records))

    # Pruning

    def _prune(self, now: datetime) -> List[UrlRecord]:
        """Drop expired records. Caller must hold the lock."""
        expired = [code for code, record in self._records.items() if record.is_expired(now)]
        removed = [self._records.pop(code) for code in expired]
        if removed:
            self._emit("info", f"Cleaned {len(removed)} expired URLs", count=len(removed))
        return removed

    def prune(self) -> int:
        """Drop expired records now and return how many were removed."""
        with self._lock:
            return len(self._prune(self.clock.now()))

    # Public operations

    def insert(
        self,
        shortcode: str,
        long_url: str,
        validity_minutes: int,
        record_id: Optional[str] = None,
    ) -> UrlRecord:
        """
        Store a new record under `shortcode`.

        Expired records are pruned first, so a code whose record has expired
        can be reused right away.

        Returns:
            Copy of the stored record, with `created_at`/`expires_at` set

        Raises:
            InvalidValidityError: If validity_minutes is not a positive integer
            DuplicateShortcodeError: If a live record already uses the code
        """
        if not is_valid_validity(validity_minutes):
            raise InvalidValidityError(validity_minutes, url=long_url)

        with self._lock:
            now = self.clock.now()
            self._prune(now)

            if shortcode in self._records:
                raise DuplicateShortcodeError(shortcode)

            record = UrlRecord(
                id=record_id,
                long_url=long_url,
                shortcode=shortcode,
                created_at=now,
                expires_at=now + timedelta(minutes=validity_minutes),
            )
            self._records[shortcode] = record
            return record.model_copy(deep=True)

    def _find(self, shortcode: str, now: datetime) -> UrlRecord:
        """Prune, then return the live record. Caller must hold the lock."""
        removed = self._prune(now)
        record = self._records.get(shortcode)
        if record is not None:
            return record
        if any(r.shortcode == shortcode for r in removed):
            raise ShortcodeExpiredError(shortcode)
        raise ShortcodeNotFoundError(shortcode)

    def _find_or_report(self, shortcode: str) -> Optional[UrlRecord]:
        """_find that reports misses on the sink instead of raising. Caller must hold the lock."""
        try:
            return self._find(shortcode, self.clock.now())
        except ShortcodeExpiredError:
            self._emit("warn", f"Attempted to access expired URL: {shortcode}", shortcode=shortcode)
        except ShortcodeNotFoundError:
            self._emit("warn", f"Shortcode not found: {shortcode}", shortcode=shortcode)
        return None

    def lookup(self, shortcode: str) -> Optional[UrlRecord]:
        """
        Return a copy of the live record for `shortcode`, or None.

        None covers both "never existed" and "just expired".
        """
        with self._lock:
            record = self._find_or_report(shortcode)
            return record.model_copy(deep=True) if record is not None else None

    def append_event(self, shortcode: str, event: AccessEvent) -> Optional[UrlRecord]:
        """
        Append `event` to the live record's clicks.

        Returns:
            Copy of the updated record, or None if the code is not live
            (nothing is changed in that case)
        """
        with self._lock:
            record = self._find_or_report(shortcode)
            if record is None:
                return None
            record.clicks.append(event.model_copy())
            return record.model_copy(deep=True)

    def list_all(self) -> List[UrlRecord]:
        """
        Return copies of all live records, newest first.

        Records created at the same instant keep their insertion order.
        """
        with self._lock:
            self._prune(self.clock.now())
            # Python's sort is stable with reverse=True as well
            ordered = sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
            return [record.model_copy(deep=True) for record in ordered]

    def clear(self) -> None:
        """Remove every record, live or not."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
        self._emit("info", "All URLs cleared", count=count)

    # Persistence

    def snapshot(self) -> List[UrlRecord]:
        """Copies of all stored records in insertion order, without pruning."""
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def flush(self) -> bool:
        """
        Save a snapshot through the persistence strategy.

        The snapshot is taken under the registry lock and the write happens
        outside it. Flushes are serialized so a stale snapshot never
        overwrites a newer one.
        Failures are reported on the event sink, never raised: the in-memory
        state is already correct.

        Returns:
            True if the snapshot was saved
        """
        with self._flush_lock:
            records = self.snapshot()
            try:
                self.persistence.save(records)
            except PersistenceError as e:
                self._emit("error", "Failed to save shortened URLs to storage", error=str(e))
                return False
        return True

    def __len__(self) -> int:
        with self._lock:
            self._prune(self.clock.now())
            return len(self._records)

    def __contains__(self, shortcode: str) -> bool:
        with self._lock:
            self._prune(self.clock.now())
            return shortcode in self._records
