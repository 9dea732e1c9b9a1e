"""Storage layer for URL shortener."""

from .base import StorageGatewayBase
from .http_gateway import HTTPStorageGateway, parse_response_body
from .models import URLMapping, Structured, Opaque, StorageResponse

__all__ = [
    "StorageGatewayBase",
    "HTTPStorageGateway",
    "parse_response_body",
    "URLMapping",
    "Structured",
    "Opaque",
    "StorageResponse",
]
