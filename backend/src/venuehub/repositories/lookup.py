"""Reference-data lookups: venue types and users."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import User, VenueType


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_venue_type(db: AsyncSession, type_id: int) -> VenueType | None:
    return await db.get(VenueType, type_id)


async def list_venue_types(db: AsyncSession) -> list[VenueType]:
    result = await db.execute(select(VenueType).order_by(VenueType.id))
    return list(result.scalars().all())
