"""
Geolocation module for click analytics.
"""

from .strategies import GeoLocator, StaticGeoLocator, HttpGeoLocator, DEFAULT_PLACEHOLDER
from .factory import GeoLocatorFactory, GeoLocatorBackend

__all__ = [
    "GeoLocator",
    "StaticGeoLocator",
    "HttpGeoLocator",
    "DEFAULT_PLACEHOLDER",
    "GeoLocatorFactory",
    "GeoLocatorBackend",
]
