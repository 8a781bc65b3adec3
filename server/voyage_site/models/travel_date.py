"""Travel date and booked date model definitions."""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base


class TravelDate(Base):
    """One bookable departure of a voyage."""

    __tablename__ = "travel_dates"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Parent voyage
    travel_slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    departure_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Editorial override of the interested-by count
    custom_display: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    displayed_booked_seat: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    booked_dates: Mapped[list["BookedDate"]] = relationship(
        "BookedDate",
        back_populates="travel_date",
        order_by="BookedDate.id",
        cascade="all, delete-orphan"
    )

    def to_row(self) -> dict[str, Any]:
        """Return the row as a plain mapping, nested booked dates included."""
        row = {column.name: getattr(self, column.name) for column in self.__table__.columns}
        row["booked_dates"] = [booked_date.to_row() for booked_date in self.booked_dates]
        return row

    def __repr__(self) -> str:
        return (
            f"<TravelDate(id={self.id}, travel_slug='{self.travel_slug}', "
            f"departure_date={self.departure_date}, published={self.published})>"
        )


class BookedDate(Base):
    """A booking, or an interest signal when no places are booked, against a travel date."""

    __tablename__ = "booked_dates"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    travel_date_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("travel_dates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # 0 means interested, not yet paid
    booked_places: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    travel_date: Mapped["TravelDate"] = relationship("TravelDate", back_populates="booked_dates")

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "travel_date_id": self.travel_date_id,
            "booked_places": self.booked_places,
            "deleted": self.deleted,
        }

    def __repr__(self) -> str:
        return (
            f"<BookedDate(id={self.id}, travel_date_id={self.travel_date_id}, "
            f"booked_places={self.booked_places}, deleted={self.deleted})>"
        )
