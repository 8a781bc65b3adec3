#!/usr/bin/env python3
"""Set up a local development database with sample voyages and search content."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from voyage_site.core.database import async_session_factory, init_db
from voyage_site.models import BookedDate, ContentEntry, TravelDate

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_CONTENT = {
    "destinations": [
        ("destinations/japon", {
            "titre": "Japon",
            "slug": "japon",
            "metaDescription": "Voyages au Japon",
            "published": True,
            "regions": ["asie"],
            "image": "/images/japon.jpg",
            "isTopDestination": True,
        }),
        ("destinations/perou", {
            "titre": "Pérou",
            "slug": "perou",
            "metaDescription": "Voyages au Pérou",
            "published": True,
            "regions": ["amerique-du-sud"],
            "image": "/images/perou.jpg",
            "isTopDestination": False,
        }),
        ("destinations/islande", {
            "titre": "Islande",
            "slug": "islande",
            "metaDescription": "Bientôt disponible",
            "published": False,
            "regions": ["europe"],
            "image": "/images/islande.jpg",
            "isTopDestination": False,
        }),
    ],
    "regions": [
        ("regions/amerique-du-sud", {"nom": "Amérique du Sud", "slug": "amerique-du-sud", "meta_description": "Amérique du Sud"}),
        ("regions/asie", {"nom": "Asie", "slug": "asie", "meta_description": "Asie"}),
        ("regions/europe", {"nom": "Europe", "slug": "europe", "meta_description": "Europe"}),
    ],
    "search_field": [
        ("search_field/search-field", {"placeholder": "Où voulez-vous partir ?", "button": "Rechercher"}),
    ],
    "page_search": [
        ("page_search/search-hero", {"title": "Trouvez votre prochain voyage", "subtitle": "Voyages en petits groupes"}),
    ],
}


async def setup_database():
    """Create the tables used by the service."""
    logger.info("Setting up database...")
    await init_db()
    logger.info("Database setup completed successfully!")


async def create_sample_data():
    """Create sample travel dates and content collections."""
    logger.info("Creating sample data...")

    async with async_session_factory() as db:
        try:
            existing = await db.execute(select(func.count()).select_from(TravelDate))
            if existing.scalar() > 0:
                logger.info("Sample data already exists, skipping...")
                return

            base_date = datetime.now(timezone.utc) + timedelta(days=30)
            for i in range(4):
                travel_date = TravelDate(
                    travel_slug="japon-sur-les-chemins-de-kumano",
                    departure_date=base_date + timedelta(days=i * 14),
                    published=i < 3,
                    custom_display=i == 0,
                    displayed_booked_seat=4 if i == 0 else None,
                )
                travel_date.booked_dates = [
                    BookedDate(booked_places=0),
                    BookedDate(booked_places=2),
                    BookedDate(booked_places=0, deleted=True),
                ]
                db.add(travel_date)

            for collection, entries in SAMPLE_CONTENT.items():
                for stem, data in entries:
                    db.add(ContentEntry(collection=collection, stem=stem, data=data))

            await db.commit()
            logger.info("Sample data created successfully!")

        except Exception as e:
            await db.rollback()
            logger.error(f"Failed to create sample data: {e}")
            raise


async def main():
    """Main setup function."""
    logger.info("Starting voyage site API setup...")

    await setup_database()
    await create_sample_data()

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: uvicorn voyage_site.main:app --reload")


if __name__ == "__main__":
    asyncio.run(main())
