"""
FastAPI dependencies for dependency injection.

This module builds the one Registry the application serves from, plus the
services layered on it. Nothing here is a module-level store: the registry
is created on first use, and tests replace it through
`app.dependency_overrides`.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (inject a registry with a manual clock)
- Flexible (swap persistence/geolocation via config)
"""

from functools import lru_cache

from fastapi import Depends

from shortcode_app.config import settings
from shortcode_app.events.strategies import EventSink, LoggingEventSink
from shortcode_app.geo.factory import GeoLocatorFactory
from shortcode_app.geo.strategies import GeoLocator
from shortcode_app.registry import Registry
from shortcode_app.services.analytics import AnalyticsRecorder
from shortcode_app.services.batch_processor import BatchProcessor
from shortcode_app.services.short_code_factory import ShortCodeFactory
from shortcode_app.services.url_service import URLService
from shortcode_app.storage.factory import PersistenceFactory


@lru_cache()
def get_event_sink() -> EventSink:
    """Diagnostic sink shared by all components (singleton)."""
    return LoggingEventSink()


@lru_cache()
def get_geolocator() -> GeoLocator:
    """Geolocator from settings (singleton, keeps its HTTP session)."""
    return GeoLocatorFactory.create()


@lru_cache()
def get_registry() -> Registry:
    """
    Get the registry instance (singleton).

    Persistence backend comes from settings; the snapshot is loaded once,
    here.
    """
    return Registry(
        persistence=PersistenceFactory.create(),
        events=get_event_sink(),
    )


def get_url_service(registry: Registry = Depends(get_registry)) -> URLService:
    """
    Get URLService with all dependencies injected.

    Controller depends on service; service depends on the registry.
    """
    events = registry.events
    processor = BatchProcessor(
        registry,
        generator=ShortCodeFactory.create_strategy(),
        events=events,
        default_validity=settings.default_validity_minutes,
        max_attempts=settings.max_generation_attempts,
    )
    recorder = AnalyticsRecorder(
        registry,
        geolocator=get_geolocator(),
        events=events,
    )
    return URLService(registry, processor=processor, recorder=recorder)
