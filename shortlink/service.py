"""Business logic service for URL shortener."""

import logging
from dataclasses import dataclass
from typing import Optional

from .hashing import HashGenerator
from .storage.base import StorageGatewayBase
from .storage.models import Opaque, URLMapping
from .errors import (
    InvalidInputError,
    NotFoundError,
    StorageError,
    StorageSchemaError,
    StorageWriteError,
    StorageWriteFailedError,
)
from .common.validators import is_valid_url
from .common.url_builder import build_short_path, normalize_redirect_target


@dataclass(frozen=True)
class SchemaCheck:
    """Outcome of the startup schema step."""

    ok: bool
    detail: str = ""


class URLShortenerService:
    """Service layer for shortening and resolving URLs.

    Every shorten or resolve call makes exactly one storage round-trip.
    Nothing is cached and nothing is retried.
    """

    def __init__(
        self,
        gateway: StorageGatewayBase,
        table_name: str = "url_shortener",
        redirector_path: str = "redirect",
        hash_generator: Optional[HashGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            gateway: Storage gateway
            table_name: Table holding the mappings
            redirector_path: Path segment short hashes are served under
            hash_generator: Optional hash generator
            logger: Optional logger
        """
        self.gateway = gateway
        self.table_name = table_name
        self.redirector_path = redirector_path.strip("/")
        self.generator = hash_generator or HashGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def initialize(self) -> SchemaCheck:
        """Ensure the mapping table exists.

        Safe to call on every start. A failure is logged as a warning and
        returned, it never aborts startup.

        Returns:
            SchemaCheck describing the outcome
        """
        try:
            result = await self.gateway.ensure_schema(self.table_name, URLMapping.COLUMNS)
        except StorageSchemaError as e:
            self.logger.warning(
                f"Schema check for table '{self.table_name}' failed: {e.detail}",
                extra={"event": "schema_check", "table": self.table_name, "detail": e.detail},
            )
            return SchemaCheck(ok=False, detail=e.detail or e.message)

        detail = result.text.strip() if isinstance(result, Opaque) else ""
        self.logger.info(f"Schema check for table '{self.table_name}' ok {detail}".rstrip())
        return SchemaCheck(ok=True, detail=detail)

    async def shorten(self, original_url: str) -> str:
        """Create a new short path for a URL.

        Not idempotent: shortening the same URL twice stores two mappings
        with different hashes.

        Args:
            original_url: The original long URL

        Returns:
            Short path, e.g. redirect/a1b2c3d4

        Raises:
            InvalidInputError: If the URL is empty or invalid (no storage call made)
            StorageWriteFailedError: If the insert fails
        """
        if not is_valid_url(original_url):
            raise InvalidInputError()

        mapping = URLMapping(
            original_url=original_url,
            short_hash=self.generator.generate(original_url),
        )

        try:
            await self.gateway.insert(self.table_name, mapping.to_values())
        except StorageWriteError as e:
            self.logger.error(f"While shortening URL {original_url} this error occurred: {e.detail}")
            raise StorageWriteFailedError(detail=e.detail) from e

        short_path = build_short_path(mapping.short_hash, self.redirector_path)
        self.logger.info(f'Shortened url "{original_url}" to "{short_path}"')
        return short_path

    async def resolve(self, short_hash: str) -> str:
        """Get the redirect target for a short hash.

        Args:
            short_hash: The hash to look up

        Returns:
            Original URL, with http:// prepended when it has no http scheme

        Raises:
            InvalidInputError: If the hash is empty
            NotFoundError: If there is no mapping or storage failed
        """
        if not short_hash:
            raise InvalidInputError("Invalid short hash")

        try:
            records = await self.gateway.query(
                self.table_name, URLMapping.HASH_COLUMN, short_hash
            )
        except StorageError as e:
            self.logger.warning(f"Lookup for {short_hash} failed: {e.detail}")
            raise NotFoundError(detail=short_hash) from e

        # First match wins
        mapping = URLMapping.from_record(records[0]) if records else None
        if mapping is None:
            self.logger.warning(f"Short hash not found: {short_hash}")
            raise NotFoundError(detail=short_hash)

        target = normalize_redirect_target(mapping.original_url)
        self.logger.debug(f"Resolved {short_hash} -> {target}")
        return target

    async def close(self) -> None:
        """Close service connections."""
        await self.gateway.close()
