from typing import Iterable, List, Optional

from shortcode_app.models.url import BatchResult, CreationRequest, UrlRecord
from shortcode_app.registry import Registry
from shortcode_app.services.analytics import AnalyticsRecorder
from shortcode_app.services.batch_processor import BatchProcessor
from shortcode_app.services.validators import is_valid_shortcode, is_valid_url


class URLService:
    """
    URL Service with dependency injection for registry, batch processor and
    analytics recorder.

    This is the single entry point the HTTP layer talks to:
    - Registry is injected (not a module-level store)
    - Easy to test (inject a registry with a manual clock)
    - Holds no state of its own
    """

    def __init__(
        self,
        registry: Registry,
        processor: Optional[BatchProcessor] = None,
        recorder: Optional[AnalyticsRecorder] = None,
    ):
        """
        Initialize URL service with dependencies.

        Args:
            registry: Registry holding all records
            processor: Batch processor (built on `registry` if omitted)
            recorder: Analytics recorder (built on `registry` if omitted)
        """
        self.registry = registry
        self.processor = processor or BatchProcessor(registry, events=registry.events)
        self.recorder = recorder or AnalyticsRecorder(registry, events=registry.events)

    def create_short_urls(self, requests: Iterable[CreationRequest]) -> BatchResult:
        """Create short URLs for a batch; failures are returned, not raised."""
        return self.processor.process(requests)

    def resolve(
        self,
        shortcode: str,
        referrer: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Optional[str]:
        """
        Resolve a shortcode for redirection and record the access.

        Returns:
            The long URL, or None if the code is missing or expired
        """
        record = self.registry.lookup(shortcode)
        if record is None:
            return None

        # Expiry between lookup and append only drops the click
        self.recorder.record_access(shortcode, referrer=referrer, ip_address=ip_address)
        return record.long_url

    def get_url(self, shortcode: str) -> Optional[UrlRecord]:
        """Get a live record with its clicks, without recording an access."""
        return self.registry.lookup(shortcode)

    def list_urls(self) -> List[UrlRecord]:
        """All live records, newest first."""
        return self.registry.list_all()

    def clear_urls(self) -> None:
        """Remove every record and persist the empty state."""
        self.registry.clear()
        self.registry.flush()

    @staticmethod
    def validate_url(url: str) -> bool:
        return is_valid_url(url)

    @staticmethod
    def validate_shortcode(shortcode: str) -> bool:
        return is_valid_shortcode(shortcode)
