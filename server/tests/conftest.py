"""Test configuration and fixtures."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from voyage_site.core.database import Base
from voyage_site.core.dependencies import get_db
from voyage_site.models import BookedDate, ContentEntry, TravelDate
from voyage_site.services.content_service import CollectionQuery, ContentQueryService

SAMPLE_CONTENT = {
    "destinations": [
        {
            "stem": "destinations/japon",
            "titre": "Japon",
            "slug": "japon",
            "metaDescription": "Voyages au Japon",
            "published": True,
            "regions": ["asie"],
            "image": "/images/japon.jpg",
            "isTopDestination": True,
            "body": "Long form content that the search box does not need",
        },
        {
            "stem": "destinations/perou",
            "titre": "Pérou",
            "slug": "perou",
            "metaDescription": "Voyages au Pérou",
            "published": True,
            "regions": ["amerique-du-sud"],
            "image": "/images/perou.jpg",
            "isTopDestination": False,
        },
        {
            "stem": "destinations/islande",
            "titre": "Islande",
            "slug": "islande",
            "metaDescription": "Bientôt disponible",
            "published": False,
            "regions": ["europe"],
            "image": "/images/islande.jpg",
            "isTopDestination": False,
        },
    ],
    "regions": [
        {"stem": "regions/asie", "nom": "Asie", "slug": "asie", "meta_description": "Asie", "order": 2},
        {"stem": "regions/europe", "nom": "Europe", "slug": "europe", "meta_description": "Europe", "order": 1},
    ],
    "search_field": [
        {"stem": "search_field/search-field", "placeholder": "Où voulez-vous partir ?"},
    ],
    "page_search": [
        {"stem": "page_search/search-hero", "title": "Trouvez votre prochain voyage"},
    ],
}


class FakeContentService(ContentQueryService):
    """
    In-memory content collections.

    Counts queries per collection, fails the collections listed in
    ``failing``, and holds every query until ``gate`` is set when one is given.
    """

    def __init__(self, collections):
        super().__init__(session_factory=None)
        self.collections = collections
        self.calls: dict[str, int] = {}
        self.failing: set[str] = set()
        self.gate: asyncio.Event | None = None
        self.in_flight = 0

    async def run(self, query: CollectionQuery, limit=None):
        self.calls[query.collection] = self.calls.get(query.collection, 0) + 1
        self.in_flight += 1
        try:
            if self.gate is not None:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
            if query.collection in self.failing:
                raise ConnectionError(f"content store unavailable: {query.collection}")
        finally:
            self.in_flight -= 1

        records = [dict(record) for record in self.collections.get(query.collection, [])]
        records = query.sort([record for record in records if query.matches(record)])
        if limit is not None:
            records = records[:limit]
        return [query.project(record) for record in records]


@pytest.fixture
def fake_content():
    """Content service over the sample collections, without a database."""
    return FakeContentService(SAMPLE_CONTENT)


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a test database engine on a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def test_session(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def content_service(test_session_factory):
    return ContentQueryService(test_session_factory)


@pytest_asyncio.fixture
async def seed_content(test_session_factory):
    """Store the sample content collections."""
    async with test_session_factory() as session:
        for collection, records in SAMPLE_CONTENT.items():
            for record in records:
                data = {key: value for key, value in record.items() if key != "stem"}
                session.add(ContentEntry(collection=collection, stem=record["stem"], data=data))
        await session.commit()
    return SAMPLE_CONTENT


@pytest.fixture
def add_travel_date(test_session_factory):
    """Store a travel date with its bookings; returns the stored id."""

    async def add(
        travel_slug="japon-kumano",
        days_ahead=30,
        published=True,
        custom_display=False,
        displayed_booked_seat=None,
        bookings=(),
    ):
        async with test_session_factory() as session:
            travel_date = TravelDate(
                travel_slug=travel_slug,
                departure_date=datetime.now(timezone.utc) + timedelta(days=days_ahead),
                published=published,
                custom_display=custom_display,
                displayed_booked_seat=displayed_booked_seat,
            )
            travel_date.booked_dates = [
                BookedDate(booked_places=places, deleted=deleted) for places, deleted in bookings
            ]
            session.add(travel_date)
            await session.commit()
            return travel_date.id

    return add


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session_factory):
    """Create the application against the test database."""
    from voyage_site.main import create_app

    app = create_app(test_session_factory)

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
