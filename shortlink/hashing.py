"""Short hash generation."""

import hashlib
from datetime import datetime, timezone
from typing import Callable, Optional

HASH_LENGTH = 8


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision and a Z suffix.

    Naive datetimes are treated as UTC.

    Example:
        >>> format_timestamp(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
        '2024-01-01T12:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def generate_hash(original_url: str, now: datetime, length: int = HASH_LENGTH) -> str:
    """Derive a short hash from a URL and a moment in time.

    The MD5 digest of timestamp + URL is rendered as lowercase hex and
    truncated. Identical inputs always give the same hash; the timestamp is
    the only thing separating repeated shortenings of the same URL.

    Args:
        original_url: The URL being shortened
        now: Creation time
        length: Number of hex characters to keep

    Returns:
        Short hash
    """
    payload = (format_timestamp(now) + original_url).encode("utf-8")
    return hashlib.md5(payload).hexdigest()[:length]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HashGenerator:
    """Generate short hashes for URLs using the current time."""

    def __init__(
        self,
        length: int = HASH_LENGTH,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize hash generator.

        Args:
            length: Hash length in hex characters
            clock: Callable returning the current time (UTC now if not given)
        """
        self.length = length
        self.clock = clock or _utcnow

    def generate(self, original_url: str, now: Optional[datetime] = None) -> str:
        """Generate a hash for a URL.

        Args:
            original_url: The URL being shortened
            now: Creation time (taken from the clock if not given)

        Returns:
            Short hash
        """
        return generate_hash(original_url, now or self.clock(), self.length)
