"""
Persistence strategies using Strategy Pattern.

The registry is an in-memory store; a persistence strategy only snapshots it:
- JSON file: survives restarts of a single process
- In-memory: keeps the last snapshot, useful for tests
- Null: persistence disabled
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional
import threading

from pydantic import TypeAdapter, ValidationError

from shortcode_app.exceptions import PersistenceError
from shortcode_app.models.url import UrlRecord

_records_adapter = TypeAdapter(List[UrlRecord])


class PersistenceStrategy(ABC):
    """
    Abstract base class for persistence strategies.

    load() is called once when a Registry starts; save() receives a full
    snapshot after a batch or a click. Both raise PersistenceError on
    failure and never partially apply.
    """

    @abstractmethod
    def load(self) -> List[UrlRecord]:
        """
        Load previously saved records.

        Returns:
            Records in the order they were saved (empty if nothing was saved)
        """
        pass

    @abstractmethod
    def save(self, records: List[UrlRecord]) -> None:
        """
        Replace the stored snapshot with `records`.

        Args:
            records: Full set of records to persist
        """
        pass


class JsonFilePersistence(PersistenceStrategy):
    """
    Stores the snapshot as a JSON array in a single file.

    Writes go to a sibling temp file that is then renamed over the target,
    so a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: str = "shortened-urls.json"):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> List[UrlRecord]:
        if not self.path.exists():
            return []

        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"cannot read {self.path}", original_error=e)

        if not raw.strip():
            return []

        try:
            return _records_adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceError(f"malformed data in {self.path}", original_error=e)

    def save(self, records: List[UrlRecord]) -> None:
        payload = _records_adapter.dump_json(records, indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        with self._lock:
            try:
                if self.path.parent != Path("."):
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_bytes(payload)
                tmp_path.replace(self.path)
            except OSError as e:
                raise PersistenceError(f"cannot write {self.path}", original_error=e)


class InMemoryPersistence(PersistenceStrategy):
    """
    Keeps the last saved snapshot in memory.

    Records are deep-copied in both directions so the snapshot can't be
    changed through references held by the registry.
    """

    def __init__(self, records: Optional[List[UrlRecord]] = None):
        self._records: List[UrlRecord] = [r.model_copy(deep=True) for r in records or []]
        self._lock = threading.Lock()
        self.save_count = 0

    def load(self) -> List[UrlRecord]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records]

    def save(self, records: List[UrlRecord]) -> None:
        with self._lock:
            self._records = [r.model_copy(deep=True) for r in records]
            self.save_count += 1

    @property
    def records(self) -> List[UrlRecord]:
        return self.load()


class NullPersistence(PersistenceStrategy):
    """
    Null Object Pattern - nothing is loaded, nothing is kept.
    """

    def load(self) -> List[UrlRecord]:
        return []

    def save(self, records: List[UrlRecord]) -> None:
        pass
