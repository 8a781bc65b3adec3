"""Unit tests for content collection queries."""

import pytest

from voyage_site.services.search_queries import (
    DESTINATION_FIELDS,
    REGION_FIELDS,
    query_content_text,
    query_destinations,
    query_regions,
    query_search_field_content,
)


@pytest.mark.asyncio
async def test_query_all_returns_collection_records(content_service, seed_content):
    records = await content_service.query_collection("regions").all()

    assert [record["slug"] for record in records] == ["asie", "europe"]
    assert all("id" in record and "stem" in record for record in records)


@pytest.mark.asyncio
async def test_query_where_filters_on_equality(content_service, seed_content):
    records = await content_service.query_collection("destinations").where("published", "=", False).all()

    assert [record["slug"] for record in records] == ["islande"]


@pytest.mark.asyncio
async def test_query_select_projects_fields(content_service, seed_content):
    records = await content_service.query_collection("regions").select("nom", "slug").all()

    assert records == [{"nom": "Asie", "slug": "asie"}, {"nom": "Europe", "slug": "europe"}]


@pytest.mark.asyncio
async def test_query_order(content_service, seed_content):
    ascending = await content_service.query_collection("regions").order("order").select("slug").all()
    descending = await content_service.query_collection("regions").order("order", "desc").select("slug").all()

    assert [record["slug"] for record in ascending] == ["europe", "asie"]
    assert [record["slug"] for record in descending] == ["asie", "europe"]


@pytest.mark.asyncio
async def test_query_first(content_service, seed_content):
    record = await content_service.query_collection("page_search").first()

    assert record["title"] == "Trouvez votre prochain voyage"
    assert record["stem"] == "page_search/search-hero"


@pytest.mark.asyncio
async def test_query_first_on_empty_collection(content_service, seed_content):
    assert await content_service.query_collection("unknown").first() is None
    assert await content_service.query_collection("unknown").all() == []


def test_query_builders_are_immutable(content_service):
    base = content_service.query_collection("destinations")
    refined = base.where("published", "=", True).select("slug")

    assert base.conditions == ()
    assert base.fields == ()
    assert refined.conditions == (("published", True),)
    assert refined.fields == ("slug",)


def test_query_rejects_unsupported_operators(content_service):
    query = content_service.query_collection("destinations")

    with pytest.raises(ValueError):
        query.where("published", "!=", True)
    with pytest.raises(ValueError):
        query.order("slug", "SIDEWAYS")


@pytest.mark.asyncio
async def test_query_destinations(content_service, seed_content):
    """Only published destinations, with the search box fields."""
    destinations = await query_destinations(content_service)

    assert [d["slug"] for d in destinations] == ["japon", "perou"]
    for destination in destinations:
        assert set(destination) == set(DESTINATION_FIELDS)
        assert destination["published"] is True


@pytest.mark.asyncio
async def test_query_regions(content_service, seed_content):
    regions = await query_regions(content_service)

    assert len(regions) == 2
    assert all(set(region) == set(REGION_FIELDS) for region in regions)


@pytest.mark.asyncio
async def test_query_single_documents(content_service, seed_content):
    search_field = await query_search_field_content(content_service)
    content_text = await query_content_text(content_service)

    assert search_field["placeholder"] == "Où voulez-vous partir ?"
    assert content_text["title"] == "Trouvez votre prochain voyage"
