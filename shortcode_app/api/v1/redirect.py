from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import RedirectResponse
from shortcode_app.services.url_service import URLService
from shortcode_app.dependencies import get_url_service

router = APIRouter(tags=["redirect"])


@router.get("/{shortcode}")
def redirect_to_long_url(
    shortcode: str,
    request: Request,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    Flow:
    1. Look the shortcode up (expired records are pruned on the way)
    2. Record the click with referrer and best-effort location
    3. Redirect
    """
    long_url = url_service.resolve(
        shortcode,
        referrer=request.headers.get("referer"),
        ip_address=request.client.host if request.client else None,
    )

    if not long_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found or expired"
        )

    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
