"""Session cache for the search box content."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from ..core.observability import CONTENT_FETCH_FAILURES
from .content_service import ContentQueryService
from .search_queries import (
    query_content_text,
    query_destinations,
    query_regions,
    query_search_field_content,
)

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    """Fetch status enumeration."""
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SearchDataEntry:
    """
    State of one cached search data entry.

    Only a ``success`` entry carries a value and only an ``error`` entry
    carries an error; use the constructors below rather than building the
    variants by hand.
    """

    status: FetchStatus = FetchStatus.IDLE
    value: Any = None
    error: Optional[BaseException] = None

    def __post_init__(self):
        if self.value is not None and self.status != FetchStatus.SUCCESS:
            raise ValueError(f"A {FetchStatus(self.status).value} entry cannot carry a value")
        if self.error is not None and self.status != FetchStatus.ERROR:
            raise ValueError(f"A {FetchStatus(self.status).value} entry cannot carry an error")

    @classmethod
    def idle(cls) -> "SearchDataEntry":
        return cls()

    @classmethod
    def pending(cls) -> "SearchDataEntry":
        return cls(status=FetchStatus.PENDING)

    @classmethod
    def succeeded(cls, value: Any) -> "SearchDataEntry":
        return cls(status=FetchStatus.SUCCESS, value=value)

    @classmethod
    def failed(cls, error: BaseException) -> "SearchDataEntry":
        return cls(status=FetchStatus.ERROR, error=error)


@dataclass(frozen=True)
class SearchDataSource:
    """Where one search data entry comes from."""

    name: str
    state_key: str
    description: str
    query: Callable[[ContentQueryService], Awaitable[Any]]


SEARCH_DATA_SOURCES = (
    SearchDataSource("destinations", "search-destinations", "destinations", query_destinations),
    SearchDataSource("regions", "search-regions", "regions", query_regions),
    SearchDataSource(
        "searchFieldContent", "search-field-content", "search field content", query_search_field_content
    ),
    SearchDataSource("contentText", "search-content-text", "content text", query_content_text),
)


class SearchDataCache:
    """
    Fetch-once cache of the content the search box needs.

    A fetch returns the cached value when one is held and queries the content
    collections otherwise. Failures are logged and reported through the
    entry status, never raised. Entries are not invalidated except by
    ``clear_search_data()``, and two fetches started before the first one
    resolves both query.
    """

    def __init__(self, content: ContentQueryService):
        self.content = content
        self._sources = {source.name: source for source in SEARCH_DATA_SOURCES}
        self._entries: dict[str, SearchDataEntry] = {}
        self.clear_search_data()

    def entry(self, name: str) -> SearchDataEntry:
        """Return the current state of the named entry."""
        return self._entries[self._sources[name].state_key]

    def snapshot(self) -> dict[str, SearchDataEntry]:
        """Return every entry keyed by its public name."""
        return {name: self.entry(name) for name in self._sources}

    # Data

    @property
    def destinations(self) -> Any:
        return self.entry("destinations").value

    @property
    def regions(self) -> Any:
        return self.entry("regions").value

    @property
    def search_field_content(self) -> Any:
        return self.entry("searchFieldContent").value

    @property
    def content_text(self) -> Any:
        return self.entry("contentText").value

    # Status

    @property
    def destinations_status(self) -> FetchStatus:
        return self.entry("destinations").status

    @property
    def regions_status(self) -> FetchStatus:
        return self.entry("regions").status

    @property
    def search_field_content_status(self) -> FetchStatus:
        return self.entry("searchFieldContent").status

    @property
    def content_text_status(self) -> FetchStatus:
        return self.entry("contentText").status

    # Methods

    async def fetch(self, name: str) -> Any:
        """
        Fetch the named entry unless a value is already cached.

        Returns:
            The entry value, or None when the query failed
        """
        source = self._sources[name]
        cached = self._entries[source.state_key]
        if cached.value is not None:
            return cached.value

        self._entries[source.state_key] = SearchDataEntry.pending()
        try:
            data = await source.query(self.content)
        except Exception as e:
            self._entries[source.state_key] = SearchDataEntry.failed(e)
            CONTENT_FETCH_FAILURES.labels(entry=name).inc()
            logger.error(
                f"Error fetching {source.description}",
                extra={"entry": name, "error": str(e)},
                exc_info=True
            )
            return None

        self._entries[source.state_key] = SearchDataEntry.succeeded(data)
        return data

    async def fetch_destinations(self) -> Any:
        return await self.fetch("destinations")

    async def fetch_regions(self) -> Any:
        return await self.fetch("regions")

    async def fetch_search_field_content(self) -> Any:
        return await self.fetch("searchFieldContent")

    async def fetch_content_text(self) -> Any:
        return await self.fetch("contentText")

    async def initialize_search_data(self) -> None:
        """Fetch all four entries concurrently."""
        await asyncio.gather(
            self.fetch_destinations(),
            self.fetch_regions(),
            self.fetch_search_field_content(),
            self.fetch_content_text(),
        )

    def clear_search_data(self) -> None:
        """Reset every entry to idle with no value."""
        for source in SEARCH_DATA_SOURCES:
            self._entries[source.state_key] = SearchDataEntry.idle()
