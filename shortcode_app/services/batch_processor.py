"""
Batch creation of short URLs with partial-success semantics.

Each request in a batch is handled on its own: a bad URL, a malformed or
taken custom code, or an exhausted code search fails that request only and
is reported in the result. Requests that succeeded stay in the registry
whatever happens to the rest of the batch.
"""

from typing import Iterable, Optional

from shortcode_app.config import settings
from shortcode_app.events.strategies import EventSink, NullEventSink, emit
from shortcode_app.exceptions import (
    DuplicateShortcodeError,
    ErrorKind,
    InvalidShortcodeError,
    InvalidUrlError,
    InvalidValidityError,
    ShortcodeExhaustedError,
    ShortenerError,
)
from shortcode_app.models.url import BatchError, BatchResult, CreationRequest, UrlRecord
from shortcode_app.registry import Registry
from shortcode_app.services.short_code_strategies import RandomShortCodeStrategy, ShortCodeStrategy
from shortcode_app.services.validators import is_valid_shortcode, is_valid_url, is_valid_validity


class BatchProcessor:
    """
    Validates requests, assigns shortcodes and inserts records.

    Args:
        registry: Where records are stored
        generator: Source of candidate codes for requests without a custom code
        events: Diagnostic sink
        default_validity: Minutes used when a request has no (or zero) validity
        max_attempts: Generated-code insertions tried before giving up
    """

    def __init__(
        self,
        registry: Registry,
        generator: Optional[ShortCodeStrategy] = None,
        events: Optional[EventSink] = None,
        default_validity: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ):
        self.registry = registry
        self.generator = generator or RandomShortCodeStrategy(length=settings.short_code_length)
        self.events = events or NullEventSink()
        if default_validity is None:
            default_validity = settings.default_validity_minutes
        if max_attempts is None:
            max_attempts = settings.max_generation_attempts
        if not is_valid_validity(default_validity):
            raise ValueError(f"default_validity must be a positive integer, got {default_validity!r}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.default_validity = default_validity
        self.max_attempts = max_attempts

    def process(self, requests: Iterable[CreationRequest]) -> BatchResult:
        """
        Create a short URL for every valid request.

        Returns:
            BatchResult with created records and per-request errors, both in
            request order. At most one persistence flush happens per call,
            and only if something was created.
        """
        result = BatchResult()

        try:
            for request in requests:
                try:
                    record = self._create(request)
                except ShortenerError as e:
                    result.errors.append(
                        BatchError(kind=e.kind, message=str(e), request_id=request.id)
                    )
                    continue
                except Exception as e:
                    emit(
                        self.events,
                        "error",
                        f"Failed to shorten URL: {request.long_url}",
                        error=repr(e),
                    )
                    result.errors.append(
                        BatchError(
                            kind=ErrorKind.PROCESSING_FAILURE,
                            message=f"Failed to process: {request.long_url}",
                            request_id=request.id,
                        )
                    )
                    continue

                result.succeeded.append(record)
                emit(
                    self.events,
                    "info",
                    "URL shortened successfully",
                    long_url=record.long_url,
                    shortcode=record.shortcode,
                    expires_at=record.expires_at.isoformat(),
                )
        finally:
            # Inserted records stay live even if iterating `requests` failed
            if result.succeeded:
                self.registry.flush()

        return result

    def _create(self, request: CreationRequest) -> UrlRecord:
        if not is_valid_url(request.long_url):
            raise InvalidUrlError(request.long_url)

        validity = request.validity or self.default_validity
        if not is_valid_validity(validity):
            raise InvalidValidityError(validity, url=request.long_url)

        if request.custom_shortcode:
            if not is_valid_shortcode(request.custom_shortcode):
                raise InvalidShortcodeError(request.custom_shortcode)
            return self.registry.insert(
                request.custom_shortcode, request.long_url, validity, record_id=request.id
            )

        return self._insert_generated(request, validity)

    def _insert_generated(self, request: CreationRequest, validity: int) -> UrlRecord:
        """
        Try fresh candidates until one inserts cleanly.

        Generation happens outside the registry lock; each insert re-checks
        uniqueness, so a concurrent writer taking the same code just costs a
        retry.
        """
        for _ in range(self.max_attempts):
            shortcode = self.generator.generate()
            try:
                return self.registry.insert(
                    shortcode, request.long_url, validity, record_id=request.id
                )
            except DuplicateShortcodeError:
                continue

        raise ShortcodeExhaustedError(request.long_url, self.max_attempts)
