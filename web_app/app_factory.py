"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
import os

from .api import api_router, invalid_url_response
from .web import web_router, redirect_router
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (may be None until lifespan sets it)
        config: Configuration instance
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Hash-based URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(LoggingMiddleware)

    # The only JSON body is the shorten request
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return invalid_url_response()

    # Static file directories (CSS and JS)
    base_path = os.path.join(os.path.dirname(__file__), "..", "ux", "web")
    css_path = os.path.join(base_path, "css")
    js_path = os.path.join(base_path, "js")

    if os.path.exists(css_path):
        app.mount("/css", StaticFiles(directory=css_path), name="css")
    if os.path.exists(js_path):
        app.mount("/js", StaticFiles(directory=js_path), name="js")

    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    app.include_router(redirect_router, prefix=f"/{config.redirector_path}", tags=["Redirect"])

    return app
