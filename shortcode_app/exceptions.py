"""
Exceptions raised by the shortcode registry.

Every exception carries an ErrorKind so batch processing can turn a caught
exception into a per-item error without inspecting its type.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error categories reported to callers"""
    INVALID_URL_FORMAT = "invalid_url_format"
    INVALID_SHORTCODE_FORMAT = "invalid_shortcode_format"
    INVALID_VALIDITY = "invalid_validity"
    DUPLICATE_SHORTCODE = "duplicate_shortcode"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    PERSISTENCE_FAILURE = "persistence_failure"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    PROCESSING_FAILURE = "processing_failure"


class ShortenerError(Exception):
    """Base exception for the shortcode registry."""

    kind: ErrorKind = None


class InvalidUrlError(ShortenerError):
    """Raised when a long URL fails validation."""

    kind = ErrorKind.INVALID_URL_FORMAT

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL format: {url}")


class InvalidShortcodeError(ShortenerError):
    """Raised when a custom shortcode is not 3-20 alphanumeric characters."""

    kind = ErrorKind.INVALID_SHORTCODE_FORMAT

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Invalid shortcode format: {shortcode}")


class InvalidValidityError(ShortenerError):
    """Raised when the validity period is not a positive number of minutes."""

    kind = ErrorKind.INVALID_VALIDITY

    def __init__(self, validity, url: str = None):
        self.validity = validity
        self.url = url
        target = url if url is not None else validity
        super().__init__(f"Invalid validity period for {target}")


class DuplicateShortcodeError(ShortenerError):
    """Raised when a live record already owns the shortcode."""

    kind = ErrorKind.DUPLICATE_SHORTCODE

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Shortcode already exists: {shortcode}")


class ShortcodeNotFoundError(ShortenerError):
    """Raised when a shortcode is not in the registry."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Shortcode not found: {shortcode}")


class ShortcodeExpiredError(ShortenerError):
    """Raised when a shortcode existed but its validity has passed."""

    kind = ErrorKind.EXPIRED

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Shortcode expired: {shortcode}")


class PersistenceError(ShortenerError):
    """Raised by persistence backends when load or save fails."""

    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Persistence error: {message}")


class ShortcodeExhaustedError(ShortenerError):
    """Raised when no free shortcode was found within the attempt budget."""

    kind = ErrorKind.RESOURCE_EXHAUSTED

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(
            f"Unable to allocate a unique shortcode for {url} after {attempts} attempts"
        )
