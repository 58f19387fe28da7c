"""SQLAlchemy models.

All models inherit from Base so Alembic autogenerate can see them.
Derived values (a venue's current available capacity) are not columns;
``Venue.average_rating`` is a denormalised copy refreshed on every rating.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from venuehub.db.session import Base  # noqa: F401  re-exported for convenience


class VenueType(Base):
    __tablename__ = "venue_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    type: Mapped[str] = mapped_column(String(50), unique=True)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True)
    email: Mapped[str] = mapped_column(String(100), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("maximum_capacity > 0", name="maximum_capacity_positive"),
        CheckConstraint(
            "average_rating >= 0 AND average_rating <= 5",
            name="average_rating_range",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str] = mapped_column(Text)
    working_hours: Mapped[str] = mapped_column(String(100))
    maximum_capacity: Mapped[int]
    venue_type_id: Mapped[int] = mapped_column(ForeignKey("venue_types.id"), index=True)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Rating(Base):
    __tablename__ = "venue_ratings"
    __table_args__ = (CheckConstraint("rating >= 0.5 AND rating <= 5", name="rating_range"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id", ondelete="CASCADE"), index=True)
    rating: Mapped[float] = mapped_column(Float)
    username: Mapped[str] = mapped_column(String(50))
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (CheckConstraint("number_of_guests > 0", name="number_of_guests_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id", ondelete="CASCADE"), index=True)
    # The moment the table is booked for, not when the booking was made
    reserved_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    number_of_guests: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
