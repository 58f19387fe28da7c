"""Reservation data-access layer.

Window filters are half-open: ``lower_bound <= reserved_at < upper_bound``.
"""

from collections.abc import Collection

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import Reservation
from venuehub.schemas.pagination import Paginated
from venuehub.services.availability import TimeWindow


def reserved_within(window: TimeWindow) -> tuple[ColumnElement[bool], ColumnElement[bool]]:
    """Half-open predicate on ``reserved_at`` shared by every window query."""
    return (
        Reservation.reserved_at >= window.lower_bound,
        Reservation.reserved_at < window.upper_bound,
    )


async def get_reservation(db: AsyncSession, reservation_id: int) -> Reservation | None:
    return await db.get(Reservation, reservation_id)


async def list_reservations_for_venue(
    db: AsyncSession, venue_id: int, window: TimeWindow
) -> list[Reservation]:
    stmt = select(Reservation).where(Reservation.venue_id == venue_id, *reserved_within(window))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_reservations_in_window(
    db: AsyncSession, venue_ids: Collection[int], window: TimeWindow
) -> list[Reservation]:
    """Return reservations of all given venues inside ``window`` in a single query."""
    if not venue_ids:
        return []
    stmt = select(Reservation).where(
        Reservation.venue_id.in_(venue_ids), *reserved_within(window)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_top_venue_ids(db: AsyncSession, page: int, size: int) -> Paginated[int]:
    """Rank venues by their number of reservations, most booked first.

    Ties are broken by venue id. ``total`` counts venues with at least one
    reservation.
    """
    reservation_count = func.count(Reservation.id)
    stmt = (
        select(Reservation.venue_id)
        .group_by(Reservation.venue_id)
        .order_by(reservation_count.desc(), Reservation.venue_id)
        .offset(page * size)
        .limit(size)
    )
    venue_ids = list((await db.execute(stmt)).scalars().all())
    total = (
        await db.execute(select(func.count(func.distinct(Reservation.venue_id))))
    ).scalar_one()
    return Paginated(items=venue_ids, page=page, size=size, total=total)


async def remove_reservation(db: AsyncSession, reservation: Reservation) -> None:
    await db.delete(reservation)
    await db.flush()
