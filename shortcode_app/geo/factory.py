"""
Factory for creating geolocation instances.
"""

from enum import Enum
import logging

from .strategies import GeoLocator, StaticGeoLocator, HttpGeoLocator
from shortcode_app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class GeoLocatorBackend(Enum):
    """Available geolocation backends"""
    STATIC = "static"
    HTTP = "http"


class GeoLocatorFactory:
    """Simple factory for creating geolocation instances from settings."""

    @classmethod
    def create(cls, backend: GeoLocatorBackend = None, config: Settings = None) -> GeoLocator:
        """
        Create a geolocator.

        Args:
            backend: Type of geolocator (from enum).
                     If None, uses value from settings.
            config: Settings to read from (defaults to the global settings)

        Returns:
            GeoLocator instance

        Raises:
            ValueError: If backend is unknown
        """
        config = config or default_settings
        if backend is None:
            backend = GeoLocatorBackend(config.geolocation_backend)

        if backend == GeoLocatorBackend.STATIC:
            instance = StaticGeoLocator(placeholder=config.geolocation_placeholder)
            logger.info("Static geolocation initialized")

        elif backend == GeoLocatorBackend.HTTP:
            instance = HttpGeoLocator(
                url_template=config.geolocation_url,
                placeholder=config.geolocation_placeholder,
                timeout=config.geolocation_timeout,
            )
            logger.info("HTTP geolocation initialized against %s", config.geolocation_url)

        else:
            raise ValueError(f"Unknown geolocation backend: {backend}")

        return instance
