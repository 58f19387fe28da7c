"""Venue enrichment.

Attaches the derived ``average_rating`` and ``available_capacity`` to a
batch of venues. A page of any size costs exactly two queries (ratings and
window reservations for all ids at once); results are grouped by venue id in
memory. ORM rows are never mutated: every venue becomes an immutable
``VenueSnapshot`` and enrichment returns new snapshots.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import Rating, Reservation, Venue
from venuehub.repositories.rating import list_ratings_for_venues
from venuehub.repositories.reservation import list_reservations_in_window
from venuehub.services.availability import TimeWindow, available_capacity
from venuehub.services.rating import recompute_average


@dataclass(frozen=True)
class VenueSnapshot:
    """Read-only copy of a venue with its derived fields."""

    id: int
    name: str
    location: str
    description: str
    working_hours: str
    maximum_capacity: int
    venue_type_id: int
    average_rating: float
    available_capacity: int

    @classmethod
    def from_model(cls, venue: Venue) -> Self:
        """Copy a venue row; capacity starts at the maximum until enriched."""
        return cls(
            id=venue.id,
            name=venue.name,
            location=venue.location,
            description=venue.description,
            working_hours=venue.working_hours,
            maximum_capacity=venue.maximum_capacity,
            venue_type_id=venue.venue_type_id,
            average_rating=venue.average_rating or 0.0,
            available_capacity=venue.maximum_capacity,
        )


def with_stats(
    venue: VenueSnapshot, ratings: Sequence[Rating], reservations: Sequence[Reservation]
) -> VenueSnapshot:
    """Return ``venue`` with rating and capacity derived from its own rows."""
    return replace(
        venue,
        average_rating=recompute_average(ratings),
        available_capacity=available_capacity(venue, reservations),
    )


async def enrich_venues(
    db: AsyncSession,
    venues: Iterable[Venue | VenueSnapshot],
    window: TimeWindow,
) -> list[VenueSnapshot]:
    """Return snapshots of ``venues`` (same order) with derived fields filled in.

    Two queries regardless of how many venues are passed, none for an empty
    batch. Reservations count when they fall inside ``window``.
    """
    snapshots = [v if isinstance(v, VenueSnapshot) else VenueSnapshot.from_model(v) for v in venues]
    if not snapshots:
        return []

    venue_ids = [venue.id for venue in snapshots]
    ratings = await list_ratings_for_venues(db, venue_ids)
    reservations = await list_reservations_in_window(db, venue_ids, window)

    ratings_by_venue: defaultdict[int, list[Rating]] = defaultdict(list)
    for rating in ratings:
        ratings_by_venue[rating.venue_id].append(rating)

    reservations_by_venue: defaultdict[int, list[Reservation]] = defaultdict(list)
    for reservation in reservations:
        reservations_by_venue[reservation.venue_id].append(reservation)

    return [
        with_stats(venue, ratings_by_venue[venue.id], reservations_by_venue[venue.id])
        for venue in snapshots
    ]
