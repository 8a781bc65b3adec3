"""Content collection entry model definition."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class ContentEntry(Base):
    """One record of a named content collection (destinations, regions, ...)."""

    __tablename__ = "content_entries"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # Path of the record inside its collection, e.g. "destinations/japon"
    stem: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("collection", "stem", name="uq_content_entry_collection_stem"),
    )

    def to_record(self) -> dict[str, Any]:
        """Return the record as callers see it: its fields plus id and stem."""
        return {"id": self.id, "stem": self.stem, **self.data}

    def __repr__(self) -> str:
        return f"<ContentEntry(id={self.id}, collection='{self.collection}', stem='{self.stem}')>"
