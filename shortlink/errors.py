"""
Error classes for the URL shortener.

Gateway-level errors describe which storage operation failed. Service-level
errors are what the HTTP layer maps to responses.
"""

from typing import Optional


class ShortLinkError(Exception):
    """
    Base error class.

    Attributes:
        message: Short description (class default unless overridden)
        detail: Optional diagnostic detail, e.g. the storage response body
    """
    message: str = "URL shortener error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message if detail is None else f"{self.message}: {detail}")


class InvalidInputError(ShortLinkError, ValueError):
    """Empty or malformed URL/hash, rejected before any I/O."""
    message = "Invalid URL"


class StorageError(ShortLinkError):
    """A storage round-trip failed."""
    message = "Storage error"


class StorageSchemaError(StorageError):
    """Schema creation failed."""
    message = "Schema creation failed"


class StorageWriteError(StorageError):
    """Insert failed."""
    message = "Insert failed"


class StorageReadError(StorageError):
    """Lookup failed."""
    message = "Query failed"


class StorageWriteFailedError(ShortLinkError):
    """Shortening could not persist the mapping."""
    message = "Failed to store short URL"


class NotFoundError(ShortLinkError):
    """No usable mapping for a hash (lookup miss or storage failure)."""
    message = "Short URL not found"
