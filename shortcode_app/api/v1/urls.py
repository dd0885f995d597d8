from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from shortcode_app.schemas.url import BatchCreate, BatchResponse, URLResponse
from shortcode_app.services.url_service import URLService
from shortcode_app.dependencies import get_url_service

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=BatchResponse, status_code=status.HTTP_201_CREATED)
def create_short_urls(
    batch: BatchCreate,
    response: Response,
    url_service: URLService = Depends(get_url_service)
):
    """
    Shorten a batch of URLs.

    Every request is handled independently. The body always carries both
    the created records and the per-request errors; the status is 201 if at
    least one record was created and 400 if none was.
    """
    result = url_service.create_short_urls(batch.requests)
    if not result.succeeded:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("/", response_model=List[URLResponse])
def list_urls(url_service: URLService = Depends(get_url_service)):
    """All live short URLs, newest first"""
    return url_service.list_urls()


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_urls(url_service: URLService = Depends(get_url_service)):
    """Remove every short URL"""
    url_service.clear_urls()


@router.get("/{shortcode}", response_model=URLResponse)
def get_url_info(
    shortcode: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get a short URL with its click history (does not count as a click)"""
    url = url_service.get_url(shortcode)
    if not url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found or expired"
        )
    return url
