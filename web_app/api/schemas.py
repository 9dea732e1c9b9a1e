"""Pydantic schemas for API requests and responses."""

from typing import Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: Optional[str] = Field(None, description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "example.com/page"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    message: str = Field("URL shortened", description="Status message")
    short_path: str = Field(
        ...,
        alias="sURL",
        description="Short path relative to the site root",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"message": "URL shortened", "sURL": "redirect/a1b2c3d4"},
            ]
        },
    }


class MessageResponse(BaseModel):
    """Error response."""

    message: str = Field(..., description="Error message or detail")
