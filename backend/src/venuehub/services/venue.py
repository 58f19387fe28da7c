"""Venue business logic.

Orchestrates repository calls and the availability/rating arithmetic before
data reaches the serialization layer.

Reads raise NotFoundError for missing venues and return VenueSnapshot or
PagedResult values. Writes return an OperationResult; their checks run in a
fixed order (field validation, then checks against stored state, then the
write itself), and a failing write is logged and reported as a failed
result rather than raised.
"""

from collections.abc import Sequence
from dataclasses import dataclass, fields
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.config import settings
from venuehub.db.session import transaction
from venuehub.exceptions import NotFoundError
from venuehub.logging import get_logger
from venuehub.models import Rating, Venue, VenueType
from venuehub.repositories.lookup import get_user, get_venue_type, list_venue_types
from venuehub.repositories.rating import add_rating, list_ratings_for_venue
from venuehub.repositories.reservation import list_reservations_for_venue, list_top_venue_ids
from venuehub.repositories.venue import (
    add_venue,
    get_venue,
    list_newest_venues,
    list_suggested_venues,
    list_venues,
    list_venues_by_ids,
    list_venues_in_cities,
    list_venues_in_city,
    remove_venue,
)
from venuehub.schemas.pagination import Paginated, PagedResult
from venuehub.services.availability import reserved_seats, resolve_window
from venuehub.services.enrichment import VenueSnapshot, with_stats
from venuehub.services.geolocation import CitySet, Geocoder, resolve_search_area
from venuehub.services.pagination import assemble_page, order_by_ranking
from venuehub.services.rating import incorporate_rating
from venuehub.services.results import OperationResult

logger = get_logger(__name__)

MIN_RATING = 0.5
MAX_RATING = 5.0


@dataclass
class VenueDraft:
    """Fields of a venue to be created."""

    name: str
    location: str
    description: str
    working_hours: str
    maximum_capacity: int
    type_id: int


@dataclass
class VenueChanges:
    """Partial update; ``None`` leaves the stored value untouched."""

    name: str | None = None
    location: str | None = None
    description: str | None = None
    working_hours: str | None = None
    maximum_capacity: int | None = None
    type_id: int | None = None


# VenueChanges field -> Venue attribute
_UPDATABLE_FIELDS = {
    "name": "name",
    "location": "location",
    "description": "description",
    "working_hours": "working_hours",
    "maximum_capacity": "maximum_capacity",
    "type_id": "venue_type_id",
}


async def _require_venue(db: AsyncSession, venue_id: int) -> Venue:
    venue = await get_venue(db, venue_id)
    if venue is None:
        raise NotFoundError("Venue", venue_id)
    return venue


# --- reads ------------------------------------------------------------------


async def get_venue_details(db: AsyncSession, venue_id: int, now: datetime) -> VenueSnapshot:
    """Return one venue with its current average rating and free seats."""
    venue = await _require_venue(db, venue_id)
    window = resolve_window(now)
    ratings = await list_ratings_for_venue(db, venue_id)
    reservations = await list_reservations_for_venue(db, venue_id, window)
    return with_stats(VenueSnapshot.from_model(venue), ratings, reservations)


async def search_venues(
    db: AsyncSession,
    page: int,
    size: int,
    search_query: str | None,
    type_ids: Sequence[int] | None,
    now: datetime,
) -> PagedResult[VenueSnapshot]:
    window = resolve_window(now)
    raw = await list_venues(db, page, size, search_query=search_query, type_ids=type_ids)
    return await assemble_page(db, raw, window)


async def get_nearby_venues(
    db: AsyncSession,
    geocoder: Geocoder,
    page: int,
    size: int,
    latitude: float | None,
    longitude: float | None,
    now: datetime,
) -> PagedResult[VenueSnapshot]:
    """Return venues in the user's city and the cities around it.

    Without coordinates the configured default city is used.
    """
    window = resolve_window(now)
    area = await resolve_search_area(
        geocoder,
        latitude,
        longitude,
        default_city=settings.default_city,
        radius_km=settings.nearby_radius_km,
    )
    logger.debug("nearby_search_area", area=type(area).__name__, cities=sorted(area.cities))

    if isinstance(area, CitySet):
        raw = await list_venues_in_cities(db, area.cities, page, size)
    else:
        raw = await list_venues_in_city(db, area.city, page, size)
    return await assemble_page(db, raw, window)


async def get_new_venues(
    db: AsyncSession, page: int, size: int, now: datetime
) -> PagedResult[VenueSnapshot]:
    window = resolve_window(now)
    return await assemble_page(db, await list_newest_venues(db, page, size), window)


async def get_trending_venues(
    db: AsyncSession, page: int, size: int, now: datetime
) -> PagedResult[VenueSnapshot]:
    """Return venues ordered by how many reservations they have."""
    window = resolve_window(now)
    ranking = await list_top_venue_ids(db, page, size)
    venues = await list_venues_by_ids(db, ranking.items)
    raw = Paginated(
        items=order_by_ranking(ranking.items, venues),
        page=ranking.page,
        size=ranking.size,
        total=ranking.total,
    )
    return await assemble_page(db, raw, window)


async def get_suggested_venues(
    db: AsyncSession, page: int, size: int, now: datetime
) -> PagedResult[VenueSnapshot]:
    """Return highly rated venues that are not fully booked right now."""
    window = resolve_window(now)
    return await assemble_page(db, await list_suggested_venues(db, window, page, size), window)


async def get_venue_type_name(db: AsyncSession, type_id: int) -> str:
    venue_type = await get_venue_type(db, type_id)
    if venue_type is None:
        raise NotFoundError("Venue type", type_id)
    return venue_type.type


async def get_venue_types(db: AsyncSession) -> list[VenueType]:
    return await list_venue_types(db)


async def get_venue_rating(db: AsyncSession, venue_id: int) -> float:
    """Return the stored average rating of a venue."""
    venue = await _require_venue(db, venue_id)
    return venue.average_rating


async def get_venue_ratings(db: AsyncSession, venue_id: int) -> list[Rating]:
    await _require_venue(db, venue_id)
    return await list_ratings_for_venue(db, venue_id)


# --- writes -----------------------------------------------------------------


def _validate_draft(draft: VenueDraft) -> OperationResult | None:
    if not draft.name.strip():
        return OperationResult.fail("Name cannot be empty.")
    if not draft.location.strip():
        return OperationResult.fail("Location cannot be empty.")
    if not draft.description.strip():
        return OperationResult.fail("Description cannot be empty.")
    if not draft.working_hours.strip():
        return OperationResult.fail("Working hours cannot be empty.")
    if draft.maximum_capacity <= 0:
        return OperationResult.fail("Maximum capacity must be positive.")
    if draft.type_id <= 0:
        return OperationResult.fail("Invalid venue type id.")
    return None


async def create_venue(db: AsyncSession, draft: VenueDraft) -> OperationResult:
    if (invalid := _validate_draft(draft)) is not None:
        return invalid

    venue = Venue(
        name=draft.name,
        location=draft.location,
        description=draft.description,
        working_hours=draft.working_hours,
        maximum_capacity=draft.maximum_capacity,
        venue_type_id=draft.type_id,
        average_rating=0.0,
    )
    try:
        async with transaction(db):
            await add_venue(db, venue)
    except SQLAlchemyError:
        logger.exception("venue_create_failed", name=draft.name)
        return OperationResult.fail("Error while creating venue. Please try again later.")

    logger.info("venue_created", venue_id=venue.id)
    return OperationResult.ok(f"Venue {draft.name} created successfully.")


def _validate_changes(changes: VenueChanges) -> OperationResult | None:
    if changes.name is not None and not changes.name.strip():
        return OperationResult.fail("Name is not valid.")
    if changes.location is not None and not changes.location.strip():
        return OperationResult.fail("Location is not valid.")
    if changes.description is not None and not changes.description.strip():
        return OperationResult.fail("Description is not valid.")
    if changes.type_id is not None and changes.type_id <= 0:
        return OperationResult.fail("Invalid venue type id.")
    if changes.working_hours is not None and not changes.working_hours.strip():
        return OperationResult.fail("Working hours are not valid.")
    if changes.maximum_capacity is not None and changes.maximum_capacity <= 0:
        return OperationResult.fail("Maximum capacity is not valid.")
    return None


def _effective_changes(changes: VenueChanges, venue: Venue) -> dict[str, object]:
    """Venue attributes that ``changes`` would actually modify."""
    updates: dict[str, object] = {}
    for field in fields(changes):
        value = getattr(changes, field.name)
        attribute = _UPDATABLE_FIELDS[field.name]
        if value is not None and value != getattr(venue, attribute):
            updates[attribute] = value
    return updates


async def update_venue(
    db: AsyncSession, venue_id: int, changes: VenueChanges | None, now: datetime
) -> OperationResult:
    """Apply a partial update to a venue.

    Lowering the maximum capacity below the guests already seated in the
    current window is refused.
    """
    venue = await _require_venue(db, venue_id)

    if changes is None:
        return OperationResult.fail(
            "Update request cannot be empty. Provide at least one field to update."
        )
    if (invalid := _validate_changes(changes)) is not None:
        return invalid

    updates = _effective_changes(changes, venue)
    if not updates:
        return OperationResult.fail("No modifications found. Please change at least one field.")

    if changes.maximum_capacity is not None and "maximum_capacity" in updates:
        window = resolve_window(now)
        seated = reserved_seats(await list_reservations_for_venue(db, venue_id, window))
        if changes.maximum_capacity < seated:
            return OperationResult.fail(
                "New maximum capacity cannot be lower than the number of currently reserved seats."
            )

    try:
        async with transaction(db):
            for attribute, value in updates.items():
                setattr(venue, attribute, value)
            await add_venue(db, venue)
    except SQLAlchemyError:
        logger.exception("venue_update_failed", venue_id=venue_id)
        return OperationResult.fail("Error while updating venue. Please try again later.")

    logger.info("venue_updated", venue_id=venue_id, fields=sorted(updates))
    return OperationResult.ok("Venue updated successfully.")


async def rate_venue(
    db: AsyncSession,
    venue_id: int,
    rating: float,
    user_id: int,
    comment: str | None = None,
) -> OperationResult:
    """Store a user's rating and refresh the venue's average.

    The rating and the new average are committed in two separate
    transactions, rating first. If the second one fails the rating stays
    stored and the venue's average lags until its next rating.
    """
    # Written as a chained comparison so NaN is rejected too
    if not MIN_RATING <= rating <= MAX_RATING:
        return OperationResult.fail("Rating must be between 0.5 and 5.")

    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    venue = await _require_venue(db, venue_id)
    existing = await list_ratings_for_venue(db, venue_id)

    new_rating = Rating(venue_id=venue_id, rating=rating, username=user.username, comment=comment)
    try:
        async with transaction(db):
            await add_rating(db, new_rating)
    except SQLAlchemyError:
        logger.exception("rating_save_failed", venue_id=venue_id, user_id=user_id)
        return OperationResult.fail("Error while updating rating. Please try again later.")

    try:
        async with transaction(db):
            venue.average_rating = incorporate_rating(existing, rating)
            await add_venue(db, venue)
    except SQLAlchemyError:
        logger.exception("rating_average_update_failed", venue_id=venue_id)
        return OperationResult.fail(
            "Error while updating venue after rating. Please try again later."
        )

    logger.info("venue_rated", venue_id=venue_id, rating=rating)
    return OperationResult.ok(f"Venue with id {venue_id} successfully rated with rating {rating}.")


async def delete_venue(db: AsyncSession, venue_id: int) -> OperationResult:
    venue = await _require_venue(db, venue_id)
    try:
        async with transaction(db):
            await remove_venue(db, venue)
    except SQLAlchemyError:
        logger.exception("venue_delete_failed", venue_id=venue_id)
        return OperationResult.fail("Error while deleting venue. Please try again later.")

    logger.info("venue_deleted", venue_id=venue_id)
    return OperationResult.ok("Venue successfully deleted.")
