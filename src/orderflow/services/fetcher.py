"""Paged table reads with normalization.

Reads a key-value table in fixed-size pages, either to exhaustion or one
page at a time for incremental (infinite scroll) loading. Pages are fetched
serially because each continuation token depends on the previous response.

Backend errors are not caught here: the first failing scan propagates to the
caller, nothing accumulated so far is returned, and nothing is retried.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from orderflow.config.constants import SCAN_PAGE_SIZE
from orderflow.core.logger import setup_logger
from orderflow.stores.base import KeyValueStore

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class FetchResult(Generic[T]):
    """Every record of a table."""

    records: List[T] = field(default_factory=list)
    total_count: int = 0


@dataclass
class BatchResult(Generic[T]):
    """One page of a table plus the token to resume after it."""

    records: List[T] = field(default_factory=list)
    next_page_token: Optional[str] = None
    total_count: int = 0

    @property
    def has_more(self) -> bool:
        return self.next_page_token is not None


class PaginatedFetcher(Generic[T]):
    """Scans a table page by page and normalizes each record."""

    def __init__(self, store: KeyValueStore, normalize: Callable[[Dict[str, Any]], T]):
        """Initialize fetcher.

        Args:
            store: Table to scan
            normalize: Pure function turning a raw record into a domain record
        """
        self.store = store
        self.normalize = normalize

    async def fetch_all(self) -> FetchResult[T]:
        """
        Read the whole table.

        Returns:
            FetchResult with every normalized record, total_count equal to
            the number of records returned
        """
        records: List[T] = []
        page_token: Optional[str] = None
        pages = 0

        while True:
            page = await self.store.scan(page_token=page_token, limit=SCAN_PAGE_SIZE)
            records.extend(self.normalize(item) for item in page.items)
            pages += 1

            logger.debug(
                f"Page {pages}: {len(page.items)} records, {len(records)} so far"
            )

            page_token = page.next_page_token
            if page_token is None:
                break

        logger.info(f"Fetched {len(records)} records in {pages} pages")
        return FetchResult(records=records, total_count=len(records))

    async def fetch_batch(self, page_token: Optional[str] = None) -> BatchResult[T]:
        """
        Read a single page of the table.

        Args:
            page_token: Token returned with the previous batch, None for the first

        Returns:
            BatchResult with this page's records, the token for the next page
            (None when the table is exhausted) and the page's record count
        """
        page = await self.store.scan(page_token=page_token, limit=SCAN_PAGE_SIZE)
        records = [self.normalize(item) for item in page.items]

        logger.info(
            f"Fetched batch of {len(records)} records "
            f"({'more available' if page.next_page_token else 'last page'})"
        )

        return BatchResult(
            records=records,
            next_page_token=page.next_page_token,
            total_count=page.count,
        )
