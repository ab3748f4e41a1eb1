"""
Base fetcher class for paginated OpenFEC endpoints.

Subclasses yield raw records from ``fetch_data`` and turn each one into a
model in ``transform``. ``run`` drives the loop and collects the results.
"""
from abc import ABC, abstractmethod
from typing import AsyncGenerator, TypeVar, Generic, Optional
from datetime import datetime
import logging

from whofunds.config.settings import settings
from whofunds.errors import UpstreamFailureError
from whofunds.ingestion.client import FECClient

T = TypeVar('T')


class BaseFetcher(ABC, Generic[T]):
    """
    Base class for all OpenFEC fetchers.

    Pagination stops at the reported page count, at ``max_pages``, or at
    the first failed page. A failed first page is raised when
    ``strict_first_page`` is set; any later failure keeps what was already
    collected and marks the run as partial.
    """

    strict_first_page = True

    def __init__(
        self,
        client: FECClient,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.client = client
        self.per_page = per_page or settings.PAGE_SIZE
        self.max_pages = max_pages or settings.MAX_PAGES
        self.partial = False
        self.last_error: Optional[UpstreamFailureError] = None
        self.reset_stats()

    @abstractmethod
    async def fetch_data(self, **kwargs) -> AsyncGenerator[dict, None]:
        """
        Fetch data from OpenFEC.

        This should be an async generator that yields raw data items.

        Args:
            **kwargs: Parameters for fetching data

        Yields:
            Raw data dictionaries from the source
        """
        pass

    @abstractmethod
    def transform(self, raw_data: dict) -> T:
        """
        Transform raw data to our model.

        Args:
            raw_data: Raw data dictionary from source

        Returns:
            Transformed data model

        Raises:
            ValueError: If the record cannot be used (it is dropped)
        """
        pass

    async def paginate(self, path: str, params: dict) -> AsyncGenerator[dict, None]:
        """
        Yield every result of a paginated endpoint, one page at a time.

        Args:
            path: Endpoint path (e.g., "/schedules/schedule_a/")
            params: Filters; page and per_page are set here
        """
        page = 1

        while True:
            if page > self.max_pages:
                self.logger.warning(
                    f"Reached maximum page limit ({self.max_pages}). Stopping pagination."
                )
                break

            self.logger.info(f"Fetching {path} page {page}...")

            try:
                results, total_pages = await self.client.get_results(
                    path, {**params, "page": page, "per_page": self.per_page}
                )
            except UpstreamFailureError as e:
                self.stats["errors"] += 1
                self.last_error = e
                if page == 1 and self.strict_first_page:
                    raise
                self.partial = True
                self.logger.error(f"Failed to fetch page {page} of {path}: {e.message}")
                break

            self.stats["pages"] += 1
            self.logger.info(f"Page {page}: {len(results)} results")

            for item in results:
                yield item

            if not results or total_pages <= page:
                break

            page += 1

    def process_item(self, raw_item: dict) -> Optional[T]:
        """
        Transform a single item, counting it as kept or dropped.

        Args:
            raw_item: Raw data from source
        """
        self.stats["processed"] += 1
        try:
            item = self.transform(raw_item)
        except ValueError as e:
            self.stats["dropped"] += 1
            self.logger.warning(f"Dropping record: {e}")
            return None

        self.stats["kept"] += 1
        return item

    async def run(self, **kwargs) -> list[T]:
        """
        Execute fetch + transform and collect the results.

        Args:
            **kwargs: Passed to fetch_data()

        Returns:
            Transformed items in source order
        """
        self.logger.info(f"Starting {self.__class__.__name__}...")
        self.stats["started_at"] = datetime.utcnow()
        items: list[T] = []

        try:
            async for raw_item in self.fetch_data(**kwargs):
                item = self.process_item(raw_item)
                if item is not None:
                    items.append(item)

        finally:
            self.stats["completed_at"] = datetime.utcnow()

            duration = self.stats["completed_at"] - self.stats["started_at"]
            self.logger.info(
                f"Fetch complete. "
                f"Pages: {self.stats['pages']}, "
                f"Processed: {self.stats['processed']}, "
                f"Kept: {self.stats['kept']}, "
                f"Dropped: {self.stats['dropped']}, "
                f"Errors: {self.stats['errors']}, "
                f"Duration: {duration}"
            )

        return items

    def reset_stats(self):
        """Reset statistics counters"""
        self.stats = {
            "pages": 0,
            "processed": 0,
            "kept": 0,
            "dropped": 0,
            "errors": 0,
            "started_at": None,
            "completed_at": None
        }
