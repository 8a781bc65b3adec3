"""Unit tests for the search page loader."""

import asyncio

import pytest

from voyage_site.services.search_loader import (
    CONTENT_TEXT_KEY,
    DESTINATIONS_KEY,
    REGIONS_KEY,
    SEARCH_FIELD_CONTENT_KEY,
    AsyncData,
    SearchDataServerLoader,
)


@pytest.mark.asyncio
async def test_load_returns_every_slot(fake_content):
    page = await SearchDataServerLoader(fake_content).load().wait()

    payload = page.payload()
    assert set(payload) == {DESTINATIONS_KEY, REGIONS_KEY, SEARCH_FIELD_CONTENT_KEY, CONTENT_TEXT_KEY}
    assert [d["slug"] for d in payload[DESTINATIONS_KEY]] == ["japon", "perou"]
    assert payload[CONTENT_TEXT_KEY]["title"] == "Trouvez votre prochain voyage"
    assert page.is_loading is False
    assert page.has_error is None
    assert page.errors() == {}


@pytest.mark.asyncio
async def test_load_starts_queries_concurrently(fake_content):
    fake_content.gate = asyncio.Event()

    page = SearchDataServerLoader(fake_content).load()
    await asyncio.sleep(0.01)

    assert fake_content.in_flight == 4
    assert page.is_loading is True

    fake_content.gate.set()
    await page.wait()

    assert page.is_loading is False


@pytest.mark.asyncio
async def test_every_render_queries_again(fake_content):
    loader = SearchDataServerLoader(fake_content)

    await loader.load().wait()
    await loader.load().wait()

    assert fake_content.calls == {"destinations": 2, "regions": 2, "search_field": 2, "page_search": 2}


@pytest.mark.asyncio
async def test_failed_query_leaves_slot_empty(fake_content):
    fake_content.failing.add("regions")

    page = await SearchDataServerLoader(fake_content).load().wait()

    assert page.regions.data is None
    assert isinstance(page.has_error, ConnectionError)
    assert set(page.errors()) == {REGIONS_KEY}
    assert page.destinations.data is not None
    assert page.content_text.data is not None


@pytest.mark.asyncio
async def test_async_data_captures_errors():
    async def boom():
        raise RuntimeError("boom")

    slot = AsyncData("broken", boom)

    assert slot.pending is True
    assert await slot.wait() is None
    assert slot.pending is False
    assert str(slot.error) == "boom"


@pytest.mark.asyncio
async def test_async_data_starts_once():
    calls = []

    async def handler():
        calls.append(1)
        return "value"

    slot = AsyncData("once", handler).start()
    slot.start()

    assert await slot.wait() == "value"
    assert await slot.wait() == "value"
    assert calls == [1]
