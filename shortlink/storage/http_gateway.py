"""HTTP storage gateway.

Each operation is a single GET against the storage service:

    {storage_url}/create?table=T&col=NAME+TYPE&col=...
    {storage_url}/insert?table=T&val=V1&val=V2
    {storage_url}/query?table=T&col=C&val=V

A non-2xx status is a failure whose detail is the response body.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

import aiohttp

from ..errors import StorageError, StorageReadError, StorageSchemaError, StorageWriteError
from .base import StorageGatewayBase
from .models import Opaque, StorageResponse, Structured


def parse_response_body(text: str, content_type: Optional[str] = None) -> StorageResponse:
    """Classify a response body as structured records or opaque text.

    Args:
        text: Raw response body
        content_type: Response content type, if known

    Returns:
        Structured when the body is a JSON array of objects, Opaque otherwise
    """
    stripped = text.strip()
    looks_like_json = content_type == "application/json" or stripped.startswith("[")
    if not looks_like_json:
        return Opaque(text)

    try:
        data = json.loads(stripped)
    except ValueError:
        return Opaque(text)

    if isinstance(data, list) and all(isinstance(row, dict) for row in data):
        return Structured(data)
    return Opaque(text)


class HTTPStorageGateway(StorageGatewayBase):
    """Storage gateway that talks to the storage service over HTTP."""

    def __init__(
        self,
        storage_url: str,
        logger: Optional[logging.Logger] = None,
        timeout: Optional[aiohttp.ClientTimeout] = None,
    ):
        """Initialize HTTP gateway.

        Args:
            storage_url: Base address of the storage service (e.g. http://localhost:8080)
            logger: Optional logger instance
            timeout: Optional client timeout (aiohttp default if not given)
        """
        super().__init__(storage_url)
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the client session."""
        if self._session is None or self._session.closed:
            if self.timeout is not None:
                self._session = aiohttp.ClientSession(timeout=self.timeout)
            else:
                self._session = aiohttp.ClientSession()
        return self._session

    async def _request(
        self,
        operation: str,
        params: List[Tuple[str, str]],
        error_cls: Type[StorageError],
    ) -> StorageResponse:
        """Issue one request and classify the response.

        Args:
            operation: Path segment naming the operation (create, insert, query)
            params: Query parameters, repeated keys allowed
            error_cls: Error raised on transport failure or non-2xx status

        Returns:
            Structured or Opaque response
        """
        session = await self._get_session()
        url = f"{self.storage_url}/{operation}"

        try:
            async with session.get(url, params=params) as response:
                text = await response.text(errors="replace")
                status = response.status
                content_type = response.content_type
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Storage {operation} request to {url} failed: {e!r}")
            raise error_cls(detail=str(e) or e.__class__.__name__) from e

        if not 200 <= status < 300:
            self.logger.error(f"Storage {operation} returned {status}: {text.strip()}")
            raise error_cls(detail=text.strip() or f"HTTP {status}")

        self.logger.debug(f"Storage {operation} returned {status}")
        return parse_response_body(text, content_type)

    async def ensure_schema(
        self,
        table_name: str,
        columns: Sequence[Tuple[str, str]],
    ) -> StorageResponse:
        params = [("table", table_name)]
        params.extend(("col", f"{name} {col_type}") for name, col_type in columns)
        return await self._request("create", params, StorageSchemaError)

    async def insert(self, table_name: str, values: Sequence[str]) -> StorageResponse:
        params = [("table", table_name)]
        params.extend(("val", value) for value in values)
        return await self._request("insert", params, StorageWriteError)

    async def query(
        self,
        table_name: str,
        filter_column: str,
        filter_value: str,
    ) -> List[Dict[str, Any]]:
        params = [
            ("table", table_name),
            ("col", filter_column),
            ("val", filter_value),
        ]
        result = await self._request("query", params, StorageReadError)

        if isinstance(result, Structured):
            return result.records
        raise StorageReadError(detail=f"Unexpected query response: {result.text.strip()}")

    async def close(self) -> None:
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
