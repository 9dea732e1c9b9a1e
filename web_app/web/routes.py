"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortlink.errors import InvalidInputError, NotFoundError

router = APIRouter()
redirect_router = APIRouter()

page_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")

INVALID_URL_FALLBACK = (
    "<h1>Invalid URL</h1><p>This short link does not exist.</p>"
    "<a href='/'>Shorten a URL</a>"
)


def _read_page(name: str, fallback: str) -> str:
    """Return the HTML of a page under ux/web, or the fallback if it is missing."""
    html_file = os.path.join(page_dir, name)
    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return f.read()
    return fallback


def invalid_url_page() -> HTMLResponse:
    """The page shown for any short link that cannot be resolved."""
    return HTMLResponse(
        content=_read_page("invalidurl.html", INVALID_URL_FALLBACK),
        status_code=status.HTTP_200_OK,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage."""
    return HTMLResponse(
        content=_read_page(
            "index.html",
            "<h1>URL Shortener</h1><p>Homepage under construction</p>",
        ),
    )


@redirect_router.get("/", include_in_schema=False)
async def missing_hash(request: Request):
    """A redirector path with no hash."""
    return invalid_url_page()


@redirect_router.get("/{short_hash}", include_in_schema=False)
async def redirect_to_url(request: Request, short_hash: str):
    """Redirect to the original URL.

    Unknown hashes and storage failures both get the invalid URL page.
    """
    service = request.app.state.service

    try:
        target = await service.resolve(short_hash)
    except (InvalidInputError, NotFoundError):
        return invalid_url_page()

    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
