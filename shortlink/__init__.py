"""Core business logic for URL shortener."""

from .hashing import HashGenerator, generate_hash
from .service import URLShortenerService, SchemaCheck

__all__ = ["HashGenerator", "generate_hash", "URLShortenerService", "SchemaCheck"]
