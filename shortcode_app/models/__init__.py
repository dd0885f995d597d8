"""
Domain models for the shortcode registry.

Records and their click analytics live together: each UrlRecord owns the
ordered list of AccessEvents recorded against it.
"""

from .url import (
    DIRECT_REFERRER,
    AccessEvent,
    BatchError,
    BatchResult,
    CreationRequest,
    UrlRecord,
)

__all__ = [
    "DIRECT_REFERRER",
    "AccessEvent",
    "BatchError",
    "BatchResult",
    "CreationRequest",
    "UrlRecord",
]
