"""Venue data-access layer.

Query functions only. Business rules and HTTP concerns live in the services and routers.
Each function takes a session and returns models, pages or scalars.
Writes only flush; committing is the caller's transaction scope.
"""

from collections.abc import Collection

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import Reservation, Venue
from venuehub.repositories.reservation import reserved_within
from venuehub.schemas.pagination import Paginated
from venuehub.services.availability import TimeWindow

SUGGESTED_MINIMUM_RATING = 4.0
LIKE_ESCAPE = "\\"


async def _paginate(
    db: AsyncSession, stmt: Select[tuple[Venue]], page: int, size: int
) -> Paginated[Venue]:
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    result = await db.execute(stmt.offset(page * size).limit(size))
    return Paginated(items=list(result.scalars().all()), page=page, size=size, total=total)


def _escape_like(text: str) -> str:
    """Make ``%``, ``_`` and the escape character match literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return text


async def get_venue(db: AsyncSession, venue_id: int) -> Venue | None:
    return await db.get(Venue, venue_id)


async def list_venues(
    db: AsyncSession,
    page: int,
    size: int,
    search_query: str | None = None,
    type_ids: Collection[int] | None = None,
) -> Paginated[Venue]:
    """Return a page of venues whose name or city contains ``search_query``."""
    stmt = select(Venue)
    if search_query:
        pattern = f"%{_escape_like(search_query)}%"
        stmt = stmt.where(
            or_(
                Venue.name.ilike(pattern, escape=LIKE_ESCAPE),
                Venue.location.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if type_ids:
        stmt = stmt.where(Venue.venue_type_id.in_(type_ids))
    return await _paginate(db, stmt.order_by(Venue.id), page, size)


async def list_venues_in_city(
    db: AsyncSession, city: str, page: int, size: int
) -> Paginated[Venue]:
    stmt = select(Venue).where(Venue.location == city).order_by(Venue.id)
    return await _paginate(db, stmt, page, size)


async def list_venues_in_cities(
    db: AsyncSession, cities: Collection[str], page: int, size: int
) -> Paginated[Venue]:
    stmt = select(Venue).where(Venue.location.in_(sorted(cities))).order_by(Venue.id)
    return await _paginate(db, stmt, page, size)


async def list_newest_venues(db: AsyncSession, page: int, size: int) -> Paginated[Venue]:
    """Return venues most recently added first (highest id first)."""
    return await _paginate(db, select(Venue).order_by(Venue.id.desc()), page, size)


async def list_venues_by_ids(db: AsyncSession, venue_ids: Collection[int]) -> list[Venue]:
    """Return the venues with the given ids, in no particular order."""
    if not venue_ids:
        return []
    result = await db.execute(select(Venue).where(Venue.id.in_(venue_ids)))
    return list(result.scalars().all())


async def list_suggested_venues(
    db: AsyncSession, window: TimeWindow, page: int, size: int
) -> Paginated[Venue]:
    """Return well-rated venues that still have free seats in ``window``.

    Ordered by stored average rating, then by free seats, both descending.
    """
    seated = (
        select(
            Reservation.venue_id.label("venue_id"),
            func.sum(Reservation.number_of_guests).label("guests"),
        )
        .where(*reserved_within(window))
        .group_by(Reservation.venue_id)
        .subquery()
    )
    free_seats = Venue.maximum_capacity - func.coalesce(seated.c.guests, 0)
    stmt = (
        select(Venue)
        .outerjoin(seated, seated.c.venue_id == Venue.id)
        .where(Venue.average_rating > SUGGESTED_MINIMUM_RATING, free_seats > 0)
        .order_by(Venue.average_rating.desc(), free_seats.desc(), Venue.id)
    )
    return await _paginate(db, stmt, page, size)


async def add_venue(db: AsyncSession, venue: Venue) -> Venue:
    """Insert or update ``venue`` and flush so database errors surface here."""
    db.add(venue)
    await db.flush()
    return venue


async def remove_venue(db: AsyncSession, venue: Venue) -> None:
    await db.delete(venue)
    await db.flush()
