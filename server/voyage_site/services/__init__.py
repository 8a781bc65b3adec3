"""Service layer package."""

from .availability import aggregate_travel_dates, count_interested
from .content_service import CollectionQuery, ContentQueryService
from .performance import ComponentPerformance, PerformanceMonitor, with_performance_tracking
from .search_data import FetchStatus, SearchDataCache, SearchDataEntry
from .search_loader import AsyncData, SearchDataServerLoader, SearchPageData
from .travel_date_service import TravelDateService

__all__ = [
    "AsyncData",
    "CollectionQuery",
    "ComponentPerformance",
    "ContentQueryService",
    "FetchStatus",
    "PerformanceMonitor",
    "SearchDataCache",
    "SearchDataEntry",
    "SearchDataServerLoader",
    "SearchPageData",
    "TravelDateService",
    "aggregate_travel_dates",
    "count_interested",
    "with_performance_tracking",
]
