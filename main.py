from fastapi import FastAPI
from shortcode_app.config import settings
from shortcode_app.logging_config import configure_logging
from shortcode_app.api.v1 import urls, redirect

configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Short URL registry with expiry and click analytics",
    debug=settings.debug
)

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)
