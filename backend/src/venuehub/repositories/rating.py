"""Rating data-access layer."""

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import Rating


async def list_ratings_for_venue(db: AsyncSession, venue_id: int) -> list[Rating]:
    """Return every rating of one venue, newest first."""
    stmt = select(Rating).where(Rating.venue_id == venue_id).order_by(Rating.id.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_ratings_for_venues(db: AsyncSession, venue_ids: Collection[int]) -> list[Rating]:
    """Return every rating of the given venues in a single query."""
    if not venue_ids:
        return []
    result = await db.execute(select(Rating).where(Rating.venue_id.in_(venue_ids)))
    return list(result.scalars().all())


async def add_rating(db: AsyncSession, rating: Rating) -> Rating:
    db.add(rating)
    await db.flush()
    return rating
