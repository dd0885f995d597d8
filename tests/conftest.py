"""
Test configuration and fixtures for the shortcode registry.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from shortcode_app.clock import ManualClock
from shortcode_app.dependencies import get_registry
from shortcode_app.events.strategies import MemoryEventSink
from shortcode_app.registry import Registry
from shortcode_app.services.analytics import AnalyticsRecorder
from shortcode_app.services.batch_processor import BatchProcessor
from shortcode_app.services.short_code_strategies import RandomShortCodeStrategy
from shortcode_app.services.url_service import URLService
from shortcode_app.storage.strategies import InMemoryPersistence

START_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def clock():
    """Clock frozen at START_TIME; tests advance it explicitly."""
    return ManualClock(START_TIME)


@pytest.fixture(scope="function")
def sink():
    """Event sink that keeps every diagnostic for assertions."""
    return MemoryEventSink()


@pytest.fixture(scope="function")
def persistence():
    return InMemoryPersistence()


@pytest.fixture(scope="function")
def registry(persistence, clock, sink):
    """
    Fresh registry for each test.
    This ensures tests are isolated and don't affect each other.
    """
    return Registry(persistence=persistence, clock=clock, events=sink)


@pytest.fixture(scope="function")
def processor(registry, sink):
    return BatchProcessor(
        registry,
        generator=RandomShortCodeStrategy(length=8),
        events=sink,
        default_validity=30,
        max_attempts=100,
    )


@pytest.fixture(scope="function")
def recorder(registry, sink):
    return AnalyticsRecorder(registry, events=sink)


@pytest.fixture(scope="function")
def url_service(registry, processor, recorder):
    return URLService(registry, processor=processor, recorder=recorder)


@pytest.fixture(scope="function")
def client(registry):
    """
    Create a test client with the registry dependency overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_registry] = lambda: registry

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
