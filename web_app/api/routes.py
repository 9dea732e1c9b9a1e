"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import ShortenRequest, ShortenResponse, MessageResponse
from shortlink.errors import InvalidInputError, StorageWriteFailedError

router = APIRouter()

INVALID_URL_MESSAGE = "Invalid URL"


def invalid_url_response() -> JSONResponse:
    """400 response for a missing or malformed URL."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=MessageResponse(message=INVALID_URL_MESSAGE).model_dump(),
    )


@router.post(
    "/",
    response_model=ShortenResponse,
    responses={
        400: {"model": MessageResponse, "description": "Invalid URL or storage failure"},
    },
    summary="Create short URL",
    description="Shorten a URL. Each call creates a new short path.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    if not body.url:
        return invalid_url_response()

    try:
        short_path = await service.shorten(body.url)
    except InvalidInputError:
        return invalid_url_response()
    except StorageWriteFailedError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=MessageResponse(message=e.detail or e.message).model_dump(),
        )

    return ShortenResponse(short_path=short_path)
