"""Data models for the storage layer."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class URLMapping:
    """Represents a URL mapping in storage."""

    # Column order is the positional order of insert values
    URL_COLUMN = "URL"
    HASH_COLUMN = "sURL"
    COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        (URL_COLUMN, "TEXT"),
        (HASH_COLUMN, "TEXT"),
    )

    original_url: str
    short_hash: str

    def to_values(self) -> List[str]:
        """Convert to positional insert values."""
        return [self.original_url, self.short_hash]

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> Optional["URLMapping"]:
        """Create from a storage record, or None if it lacks a usable URL."""
        original_url = record.get(cls.URL_COLUMN)
        if not isinstance(original_url, str) or not original_url:
            return None
        short_hash = record.get(cls.HASH_COLUMN)
        return cls(
            original_url=original_url,
            short_hash=short_hash if isinstance(short_hash, str) else "",
        )


@dataclass(frozen=True)
class Structured:
    """Response body that parsed as a JSON array of records."""

    records: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Opaque:
    """Response body kept as plain text."""

    text: str = ""


StorageResponse = Union[Structured, Opaque]
