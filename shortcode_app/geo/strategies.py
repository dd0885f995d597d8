"""
Geolocation strategies for access events.

Location is best-effort: a lookup that fails or has nothing to go on falls
back to a fixed placeholder instead of failing the click.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "India / AP"


class GeoLocator(ABC):
    """Abstract base class for geolocation lookups"""

    @abstractmethod
    def locate(self, ip_address: Optional[str] = None) -> str:
        """
        Resolve a visitor location.

        Args:
            ip_address: Client IP address, if known

        Returns:
            Human-readable location string, never empty
        """
        pass


class StaticGeoLocator(GeoLocator):
    """
    Returns the same placeholder for every visitor.

    Used when no geolocation service is configured.
    """

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER):
        self.placeholder = placeholder

    def locate(self, ip_address: Optional[str] = None) -> str:
        return self.placeholder


class HttpGeoLocator(GeoLocator):
    """
    Looks the IP up against an ip-api.com style JSON endpoint.

    The endpoint URL is a template with an `{ip}` placeholder. The response
    is expected to carry `country` and optionally `regionName`/`region`.
    """

    def __init__(
        self,
        url_template: str,
        placeholder: str = DEFAULT_PLACEHOLDER,
        timeout: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        self.url_template = url_template
        self.placeholder = placeholder
        self.timeout = timeout
        self.session = session or requests.Session()

    def locate(self, ip_address: Optional[str] = None) -> str:
        if not ip_address:
            return self.placeholder

        try:
            response = self.session.get(
                self.url_template.format(ip=ip_address),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Geolocation lookup failed for %s: %s", ip_address, e)
            return self.placeholder

        country = data.get("country") if isinstance(data, dict) else None
        if not country:
            return self.placeholder

        region = data.get("regionName") or data.get("region")
        return f"{country} / {region}" if region else country
