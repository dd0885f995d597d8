from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import List, Optional
from datetime import datetime
from shortcode_app.config import settings
from shortcode_app.exceptions import ErrorKind
from shortcode_app.models.url import CreationRequest


class BatchCreate(BaseModel):
    requests: List[CreationRequest] = Field(..., min_length=1, description="URLs to shorten")


class AccessEventResponse(BaseModel):
    id: str
    timestamp: datetime
    referrer: str
    location: str

    model_config = ConfigDict(from_attributes=True)


class URLResponse(BaseModel):
    """Response schema that serializes a UrlRecord

    - from_attributes=True reads straight from the domain model
    - @computed_field creates derived fields (short_url, click_count)
    """
    id: Optional[str] = None
    long_url: str
    shortcode: str
    created_at: datetime
    expires_at: datetime
    clicks: List[AccessEventResponse] = Field(default_factory=list)

    @computed_field
    @property
    def short_url(self) -> str:
        """Computed field - automatically generated from shortcode"""
        return f"{settings.base_url}/{self.shortcode}"

    @computed_field
    @property
    def click_count(self) -> int:
        return len(self.clicks)

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class BatchErrorResponse(BaseModel):
    kind: ErrorKind
    message: str
    request_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BatchResponse(BaseModel):
    succeeded: List[URLResponse]
    errors: List[BatchErrorResponse]

    model_config = ConfigDict(from_attributes=True)
