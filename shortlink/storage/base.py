"""Abstract base class for storage gateway implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple

from .models import StorageResponse


class StorageGatewayBase(ABC):
    """Abstract base class for the storage operations the shortener needs."""

    def __init__(self, storage_url: str):
        """Initialize gateway.

        Args:
            storage_url: Base address of the storage service
        """
        self.storage_url = storage_url.rstrip("/")

    @abstractmethod
    async def ensure_schema(
        self,
        table_name: str,
        columns: Sequence[Tuple[str, str]],
    ) -> StorageResponse:
        """Create a table if it does not exist.

        Args:
            table_name: Table to create
            columns: Ordered (name, type) pairs

        Returns:
            Backend response

        Raises:
            StorageSchemaError: If the backend rejects the request
        """
        pass

    @abstractmethod
    async def insert(self, table_name: str, values: Sequence[str]) -> StorageResponse:
        """Insert one row.

        Args:
            table_name: Target table
            values: Values in the table's declared column order

        Returns:
            Backend response

        Raises:
            StorageWriteError: If the insert fails
        """
        pass

    @abstractmethod
    async def query(
        self,
        table_name: str,
        filter_column: str,
        filter_value: str,
    ) -> List[Dict[str, Any]]:
        """Find rows where filter_column equals filter_value.

        Args:
            table_name: Table to read
            filter_column: Column to match on
            filter_value: Value to match

        Returns:
            List of records (empty if none match)

        Raises:
            StorageReadError: If the lookup fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
