"""Abstract base store for key-value tables."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ScanPage:
    """One page of a full-table scan.

    Attributes:
        items: Raw records in this page
        next_page_token: Opaque continuation token, None on the last page
        count: Number of records the backend reported for this page
    """

    items: List[Dict[str, Any]] = field(default_factory=list)
    next_page_token: Optional[str] = None
    count: int = 0


class KeyValueStore(ABC):
    """Abstract key-value table.

    This allows easy swapping between storage backends. Records are plain
    mappings identified by their ``id`` field. Scans have no guaranteed
    order.
    """

    @abstractmethod
    async def scan(
        self, page_token: Optional[str] = None, limit: Optional[int] = None
    ) -> ScanPage:
        """Read one page of the table.

        Args:
            page_token: Continuation token from the previous page, None to start
            limit: Maximum records to read for this page

        Returns:
            ScanPage with the records and the token for the next page
        """
        pass

    @abstractmethod
    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Get a single record by id, None if it does not exist."""
        pass

    @abstractmethod
    async def put(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a record. Returns the stored record."""
        pass

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Delete a record. Deleting a missing record is not an error."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        pass

    async def close(self) -> None:
        """Release backend connections."""
        return None
