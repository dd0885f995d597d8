"""
Tests for the registry: uniqueness, lazy expiry, ordering and startup load.
"""

from datetime import timedelta

import pytest

from shortcode_app.events.strategies import EventSink
from shortcode_app.exceptions import DuplicateShortcodeError, InvalidValidityError, PersistenceError
from shortcode_app.models.url import AccessEvent
from shortcode_app.registry import Registry
from shortcode_app.storage.strategies import InMemoryPersistence, PersistenceStrategy

from conftest import START_TIME


class BrokenPersistence(PersistenceStrategy):
    """Persistence whose every call fails"""

    def load(self):
        raise PersistenceError("disk on fire")

    def save(self, records):
        raise PersistenceError("disk on fire")


class ExplodingSink(EventSink):
    """Sink whose every method raises"""

    def info(self, message, **data):
        raise RuntimeError("sink down")

    def warn(self, message, **data):
        raise RuntimeError("sink down")

    def error(self, message, **data):
        raise RuntimeError("sink down")


class TestInsert:
    """Test insertion and uniqueness"""

    def test_insert_sets_timestamps(self, registry):
        record = registry.insert("abc", "https://example.com", 30, record_id="1")

        assert record.shortcode == "abc"
        assert record.id == "1"
        assert record.created_at == START_TIME
        assert record.expires_at == START_TIME + timedelta(minutes=30)
        assert record.clicks == []

    def test_duplicate_live_code_rejected(self, registry):
        registry.insert("abc", "https://example.com", 30)

        with pytest.raises(DuplicateShortcodeError) as exc_info:
            registry.insert("abc", "https://other.example.com", 30)

        assert "abc" in str(exc_info.value)
        assert registry.lookup("abc").long_url == "https://example.com"

    def test_shortcodes_are_case_sensitive(self, registry):
        registry.insert("abc", "https://example.com/lower", 30)
        registry.insert("ABC", "https://example.com/upper", 30)

        assert registry.lookup("abc").long_url == "https://example.com/lower"
        assert registry.lookup("ABC").long_url == "https://example.com/upper"

    @pytest.mark.parametrize("validity", [0, -5, 1.5])
    def test_non_positive_validity_rejected(self, registry, validity):
        with pytest.raises(InvalidValidityError):
            registry.insert("abc", "https://example.com", validity)
        assert "abc" not in registry

    def test_caller_id_not_deduplicated(self, registry):
        """The caller-supplied id is opaque; only shortcodes must be unique"""
        registry.insert("first", "https://example.com/1", 30, record_id="same")
        registry.insert("second", "https://example.com/2", 30, record_id="same")

        assert len(registry) == 2

    def test_returned_record_is_a_copy(self, registry):
        record = registry.insert("abc", "https://example.com", 30)
        record.long_url = "https://tampered.example.com"

        assert registry.lookup("abc").long_url == "https://example.com"


class TestExpiry:
    """Test lazy pruning of expired records"""

    def test_visible_until_expiry(self, registry, clock):
        registry.insert("abc", "https://example.com", 1)

        clock.advance(seconds=59)
        assert registry.lookup("abc") is not None

    def test_gone_exactly_at_expiry(self, registry, clock):
        """A record with expires_at = t is not returned at t"""
        registry.insert("abc", "https://example.com", 1)

        clock.advance(seconds=60)

        assert registry.lookup("abc") is None

    def test_gone_after_expiry(self, registry, clock, sink):
        registry.insert("abc", "https://example.com", 1)

        clock.advance(seconds=61)

        assert registry.lookup("abc") is None
        assert "Attempted to access expired URL: abc" in sink.messages("warn")
        assert "Cleaned 1 expired URLs" in sink.messages("info")

    def test_missing_code_reported(self, registry, sink):
        assert registry.lookup("missing") is None
        assert "Shortcode not found: missing" in sink.messages("warn")

    def test_code_reusable_after_expiry(self, registry, clock):
        registry.insert("abc", "https://example.com/old", 1)
        clock.advance(minutes=2)

        record = registry.insert("abc", "https://example.com/new", 5)

        assert record.long_url == "https://example.com/new"
        assert registry.lookup("abc").long_url == "https://example.com/new"

    def test_prune_only_removes_expired(self, registry, clock):
        registry.insert("short", "https://example.com/1", 1)
        registry.insert("long", "https://example.com/2", 10)

        clock.advance(minutes=5)

        assert registry.prune() == 1
        assert "short" not in registry
        assert "long" in registry

    def test_list_all_skips_expired(self, registry, clock):
        registry.insert("short", "https://example.com/1", 1)
        registry.insert("long", "https://example.com/2", 10)

        clock.advance(minutes=1)

        assert [r.shortcode for r in registry.list_all()] == ["long"]


class TestListAll:
    """Test newest-first ordering"""

    def test_newest_first(self, registry, clock):
        registry.insert("first", "https://example.com/1", 30)
        clock.advance(seconds=1)
        registry.insert("second", "https://example.com/2", 30)
        clock.advance(seconds=1)
        registry.insert("third", "https://example.com/3", 30)

        codes = [r.shortcode for r in registry.list_all()]

        assert codes == ["third", "second", "first"]

    def test_ties_keep_insertion_order(self, registry):
        for code in ["aaa", "bbb", "ccc"]:
            registry.insert(code, "https://example.com", 30)

        assert [r.shortcode for r in registry.list_all()] == ["aaa", "bbb", "ccc"]

    def test_sorted_strictly_by_created_at(self, registry, clock):
        registry.insert("aaa", "https://example.com", 30)
        clock.advance(seconds=5)
        registry.insert("bbb", "https://example.com", 30)
        registry.insert("ccc", "https://example.com", 30)

        records = registry.list_all()

        assert [r.shortcode for r in records] == ["bbb", "ccc", "aaa"]
        created = [r.created_at for r in records]
        assert created == sorted(created, reverse=True)


class TestClear:
    def test_clear_removes_everything(self, registry, sink):
        registry.insert("abc", "https://example.com", 30)
        registry.insert("def", "https://example.com", 30)

        registry.clear()

        assert registry.list_all() == []
        assert "All URLs cleared" in sink.messages("info")

    def test_codes_reusable_after_clear(self, registry):
        registry.insert("abc", "https://example.com", 30)
        registry.clear()

        registry.insert("abc", "https://example.com/again", 30)

        assert registry.lookup("abc").long_url == "https://example.com/again"


class TestAppendEvent:
    def test_appends_to_live_record(self, registry, clock):
        registry.insert("abc", "https://example.com", 30)
        event = AccessEvent(timestamp=clock.now(), referrer="direct", location="here")

        record = registry.append_event("abc", event)

        assert record.click_count == 1
        assert registry.lookup("abc").clicks[0].id == event.id

    def test_missing_record_unchanged(self, registry, clock):
        event = AccessEvent(timestamp=clock.now(), location="here")

        assert registry.append_event("missing", event) is None
        assert registry.list_all() == []


class TestPersistence:
    """Test startup load and flush"""

    def test_loads_existing_records(self, clock, sink):
        seed = Registry(persistence=InMemoryPersistence(), clock=clock)
        seed.insert("abc", "https://example.com", 30)
        store = InMemoryPersistence(seed.snapshot())

        registry = Registry(persistence=store, clock=clock, events=sink)

        assert registry.lookup("abc").long_url == "https://example.com"

    def test_loaded_expired_records_pruned(self, clock, sink):
        seed = Registry(clock=clock)
        seed.insert("abc", "https://example.com", 1)
        store = InMemoryPersistence(seed.snapshot())
        clock.advance(minutes=5)

        registry = Registry(persistence=store, clock=clock, events=sink)

        assert registry.list_all() == []
        assert "Cleaned 1 expired URLs" in sink.messages("info")

    def test_load_failure_starts_empty(self, clock, sink):
        registry = Registry(persistence=BrokenPersistence(), clock=clock, events=sink)

        assert registry.list_all() == []
        assert "Failed to load shortened URLs from storage" in sink.messages("error")

    def test_flush_saves_snapshot(self, registry, persistence):
        registry.insert("abc", "https://example.com", 30)

        assert registry.flush() is True
        assert [r.shortcode for r in persistence.records] == ["abc"]

    def test_flush_failure_is_absorbed(self, clock, sink):
        registry = Registry(persistence=BrokenPersistence(), clock=clock, events=sink)
        registry.insert("abc", "https://example.com", 30)

        assert registry.flush() is False
        assert registry.lookup("abc") is not None
        assert "Failed to save shortened URLs to storage" in sink.messages("error")

    def test_sink_failure_does_not_break_registry(self, clock):
        registry = Registry(clock=clock, events=ExplodingSink())

        registry.insert("abc", "https://example.com", 30)
        assert registry.lookup("missing") is None
        assert registry.lookup("abc") is not None
