"""Per-render loading of the search page content."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from .content_service import ContentQueryService
from .search_queries import (
    query_content_text,
    query_destinations,
    query_regions,
    query_search_field_content,
)

logger = logging.getLogger(__name__)

# Payload keys of the search page render
DESTINATIONS_KEY = "destinations-in-search"
REGIONS_KEY = "regions"
SEARCH_FIELD_CONTENT_KEY = "search-field-content"
CONTENT_TEXT_KEY = "page-search-search-hero"


class AsyncData:
    """
    Result slot of one render-time query.

    The handler starts running on ``start()``. A failure is captured in
    ``error`` and never raised from ``wait()``.
    """

    def __init__(self, key: str, handler: Callable[[], Awaitable[Any]]):
        self.key = key
        self.data: Any = None
        self.error: Optional[BaseException] = None
        self._handler = handler
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is None or not self._task.done()

    def start(self) -> "AsyncData":
        if self._task is None:
            self._task = asyncio.create_task(self._resolve(), name=f"async-data:{self.key}")
        return self

    async def wait(self) -> Any:
        await self.start()._task
        return self.data

    async def _resolve(self) -> None:
        try:
            self.data = await self._handler()
        except Exception as e:
            self.error = e
            logger.warning(
                "Search page query failed",
                extra={"key": self.key, "error": str(e)},
                exc_info=True
            )


class SearchPageData:
    """The four search page queries of one render."""

    def __init__(
        self,
        destinations: AsyncData,
        regions: AsyncData,
        search_field_content: AsyncData,
        content_text: AsyncData,
    ):
        self.destinations = destinations
        self.regions = regions
        self.search_field_content = search_field_content
        self.content_text = content_text

    @property
    def slots(self) -> tuple[AsyncData, ...]:
        return (self.destinations, self.regions, self.search_field_content, self.content_text)

    @property
    def is_loading(self) -> bool:
        return any(slot.pending for slot in self.slots)

    @property
    def has_error(self) -> Optional[BaseException]:
        """The first query error, if any."""
        return next((slot.error for slot in self.slots if slot.error is not None), None)

    async def wait(self) -> "SearchPageData":
        await asyncio.gather(*(slot.wait() for slot in self.slots))
        return self

    def payload(self) -> dict[str, Any]:
        return {slot.key: slot.data for slot in self.slots}

    def errors(self) -> dict[str, str]:
        return {slot.key: str(slot.error) for slot in self.slots if slot.error is not None}


class SearchDataServerLoader:
    """Loads the search page content afresh on every render."""

    def __init__(self, content: ContentQueryService):
        self.content = content

    def load(self) -> SearchPageData:
        """
        Start the four queries concurrently.

        Must be called with a running event loop. Await ``wait()`` on the
        result to let every query settle.
        """
        return SearchPageData(
            destinations=AsyncData(DESTINATIONS_KEY, lambda: query_destinations(self.content)).start(),
            regions=AsyncData(REGIONS_KEY, lambda: query_regions(self.content)).start(),
            search_field_content=AsyncData(
                SEARCH_FIELD_CONTENT_KEY, lambda: query_search_field_content(self.content)
            ).start(),
            content_text=AsyncData(CONTENT_TEXT_KEY, lambda: query_content_text(self.content)).start(),
        )
