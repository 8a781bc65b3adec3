"""Content queries backing the search box and the search page."""

from typing import Any, Optional

from .content_service import ContentQueryService

DESTINATION_FIELDS = (
    "titre",
    "slug",
    "metaDescription",
    "published",
    "regions",
    "image",
    "stem",
    "isTopDestination",
)

REGION_FIELDS = ("nom", "slug", "meta_description")


async def query_destinations(content: ContentQueryService) -> list[dict[str, Any]]:
    """Published destinations, projected to what the search box shows."""
    return await (
        content.query_collection("destinations")
        .select(*DESTINATION_FIELDS)
        .where("published", "=", True)
        .all()
    )


async def query_regions(content: ContentQueryService) -> list[dict[str, Any]]:
    return await content.query_collection("regions").select(*REGION_FIELDS).all()


async def query_search_field_content(content: ContentQueryService) -> Optional[dict[str, Any]]:
    return await content.query_collection("search_field").first()


async def query_content_text(content: ContentQueryService) -> Optional[dict[str, Any]]:
    """Hero copy of the search page."""
    return await content.query_collection("page_search").first()
