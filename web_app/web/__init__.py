"""HTML pages and short link redirects."""

from .routes import router as web_router, redirect_router

__all__ = ["web_router", "redirect_router"]
