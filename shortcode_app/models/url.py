"""
Domain models for the shortcode registry.

Records live in memory inside the Registry and are serialized through the
persistence strategies, so these are plain pydantic models rather than ORM
tables.
"""

from datetime import datetime
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from shortcode_app.exceptions import ErrorKind

DIRECT_REFERRER = "direct"


class AccessEvent(BaseModel):
    """One recorded access to a short URL."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Unique event ID")
    timestamp: AwareDatetime = Field(..., description="When the access happened")
    referrer: str = Field(DIRECT_REFERRER, description="Where the visitor came from")
    location: str = Field(..., description="Best-effort visitor location")


class UrlRecord(BaseModel):
    """
    One shortened link.

    `clicks` is append-only; the Registry is the only writer.
    """

    id: Optional[str] = Field(None, description="Caller-supplied identifier")
    long_url: str = Field(..., description="Destination URL")
    shortcode: str = Field(..., description="Unique short key")
    created_at: AwareDatetime
    expires_at: AwareDatetime
    clicks: List[AccessEvent] = Field(default_factory=list)

    @property
    def click_count(self) -> int:
        return len(self.clicks)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class CreationRequest(BaseModel):
    """
    A single item of a batch creation call.

    Field values are taken as sent. Type and format problems are reported
    per item by the batch processor instead of rejecting the whole batch.
    """

    id: Optional[str] = None
    long_url: Any = None
    validity: Any = Field(None, description="Validity in minutes, defaults when missing or 0")
    custom_shortcode: Any = Field("", description="Empty means generate a code")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value):
        return None if value is None else str(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "1",
                "long_url": "https://example.com/some/long/path",
                "validity": 30,
                "custom_shortcode": "",
            }
        }
    )


class BatchError(BaseModel):
    """Failure of one request in a batch."""

    kind: ErrorKind
    message: str
    request_id: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class BatchResult(BaseModel):
    """Outcome of a batch: successes and failures, each in request order."""

    succeeded: List[UrlRecord] = Field(default_factory=list)
    errors: List[BatchError] = Field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]
