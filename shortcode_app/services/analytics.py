"""
Click recording for short URLs.

Each successful access appends one AccessEvent to the record in the
registry and flushes the registry snapshot.
"""

from typing import Optional

from shortcode_app.events.strategies import EventSink, NullEventSink, emit
from shortcode_app.geo.strategies import GeoLocator, StaticGeoLocator
from shortcode_app.models.url import DIRECT_REFERRER, AccessEvent
from shortcode_app.registry import Registry


class AnalyticsRecorder:
    """
    Appends access events to live records.

    Args:
        registry: Registry holding the records
        geolocator: Resolves a location for each access
        events: Diagnostic sink
    """

    def __init__(
        self,
        registry: Registry,
        geolocator: Optional[GeoLocator] = None,
        events: Optional[EventSink] = None,
    ):
        self.registry = registry
        self.geolocator = geolocator or StaticGeoLocator()
        self.events = events or NullEventSink()

    def record_access(
        self,
        shortcode: str,
        referrer: Optional[str] = DIRECT_REFERRER,
        ip_address: Optional[str] = None,
    ) -> bool:
        """
        Record one access to `shortcode`.

        Args:
            shortcode: Code that was accessed
            referrer: Where the visitor came from; empty means "direct"
            ip_address: Client IP for geolocation, if known

        Returns:
            True if the event was recorded, False if the code is missing or
            expired (nothing is changed in that case)
        """
        # Cheap existence check first so a miss never pays for geolocation
        if self.registry.lookup(shortcode) is None:
            return False

        event = AccessEvent(
            timestamp=self.registry.clock.now(),
            referrer=referrer or DIRECT_REFERRER,
            location=self.geolocator.locate(ip_address),
        )

        # The record may have expired while we were geolocating
        record = self.registry.append_event(shortcode, event)
        if record is None:
            return False

        self.registry.flush()
        emit(
            self.events,
            "info",
            f"Click recorded for shortcode: {shortcode}",
            referrer=event.referrer,
            click_count=record.click_count,
        )
        return True
