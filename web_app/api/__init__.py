"""JSON API for URL shortener."""

from .routes import router as api_router, invalid_url_response

__all__ = ["api_router", "invalid_url_response"]
