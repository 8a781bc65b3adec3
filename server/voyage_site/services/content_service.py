"""Query layer over the content collections."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..models.content import ContentEntry

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class CollectionQuery:
    """
    Immutable query over one content collection.

    Each builder method returns a new query, so a base query can be shared
    and refined. ``all()`` and ``first()`` run it.
    """

    service: "ContentQueryService"
    collection: str
    fields: tuple[str, ...] = ()
    conditions: tuple[tuple[str, Any], ...] = ()
    ordering: tuple[tuple[str, bool], ...] = ()

    def select(self, *fields: str) -> "CollectionQuery":
        """Project records to the given fields."""
        return replace(self, fields=self.fields + fields)

    def where(self, field_name: str, operator: str, value: Any) -> "CollectionQuery":
        """
        Keep records whose field equals ``value``.

        Raises:
            ValueError: If the operator is not ``=``
        """
        if operator != "=":
            raise ValueError(f"Unsupported content query operator: {operator!r}")
        return replace(self, conditions=self.conditions + ((field_name, value),))

    def order(self, field_name: str, direction: str = "ASC") -> "CollectionQuery":
        """Sort records by a field, ``ASC`` or ``DESC``."""
        direction = direction.upper()
        if direction not in ("ASC", "DESC"):
            raise ValueError(f"Unsupported sort direction: {direction!r}")
        return replace(self, ordering=self.ordering + ((field_name, direction == "DESC"),))

    def matches(self, record: dict[str, Any]) -> bool:
        return all(
            record.get(field_name, _MISSING) == value
            for field_name, value in self.conditions
        )

    def project(self, record: dict[str, Any]) -> dict[str, Any]:
        if not self.fields:
            return record
        return {name: record[name] for name in self.fields if name in record}

    def sort(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        # Stable sorts applied from the last key to the first
        for field_name, descending in reversed(self.ordering):
            records.sort(
                key=lambda record: (record.get(field_name) is None, record.get(field_name)),
                reverse=descending,
            )
        return records

    async def all(self) -> list[dict[str, Any]]:
        """Run the query and return every matching record."""
        return await self.service.run(self)

    async def first(self) -> Optional[dict[str, Any]]:
        """Run the query and return the first matching record, or None."""
        records = await self.service.run(self, limit=1)
        return records[0] if records else None


class ContentQueryService:
    """Service for reading content collections."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    def query_collection(self, collection: str) -> CollectionQuery:
        """Start a query over the named collection."""
        return CollectionQuery(service=self, collection=collection)

    async def run(self, query: CollectionQuery, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """
        Execute a collection query.

        Every call uses its own database session so independent queries can
        run concurrently.
        """
        stmt = (
            select(ContentEntry)
            .where(ContentEntry.collection == query.collection)
            .order_by(ContentEntry.stem, ContentEntry.id)
        )

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            records = [entry.to_record() for entry in result.scalars()]

        records = query.sort([record for record in records if query.matches(record)])
        if limit is not None:
            records = records[:limit]

        logger.debug(
            "Content collection queried",
            extra={
                "collection": query.collection,
                "conditions": dict(query.conditions),
                "total_found": len(records),
            }
        )

        return [query.project(record) for record in records]
