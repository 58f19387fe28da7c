import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import make_rating, make_reservation, make_user, make_venue, make_venue_type
from venuehub.models import Rating, Reservation, User, Venue, VenueType


async def _count(db: AsyncSession, model: type) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


# ---------------------------------------------------------------------------
# 1. Persistence: seed data
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_seed_creates_expected_rows(db: AsyncSession, seeded_db: dict[str, int]) -> None:
    assert await _count(db, VenueType) == 2
    assert await _count(db, User) == 2
    assert await _count(db, Venue) == 5
    assert await _count(db, Rating) == 6
    assert await _count(db, Reservation) == 7


# ---------------------------------------------------------------------------
# 2. Check constraints
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [
        ("maximum_capacity", 0),
        ("maximum_capacity", -10),
        ("average_rating", -0.5),
        ("average_rating", 5.5),
    ],
    ids=["capacity_zero", "capacity_negative", "average_below_min", "average_above_max"],
)
async def test_venue_check_constraint_violation(
    db: AsyncSession, field: str, value: object
) -> None:
    db.add(make_venue_type())
    await db.flush()

    venue = make_venue()
    setattr(venue, field, value)
    db.add(venue)

    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()
    await db.rollback()


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [0.0, 0.4, 5.1], ids=["zero", "below_min", "above_max"])
async def test_rating_range_violation(db: AsyncSession, value: float) -> None:
    db.add(make_venue_type())
    venue = make_venue()
    db.add(venue)
    await db.flush()

    db.add(make_rating(venue_id=venue.id, rating=value))

    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()
    await db.rollback()


@pytest.mark.asyncio
async def test_reservation_needs_guests(db: AsyncSession) -> None:
    db.add(make_venue_type())
    user = make_user()
    venue = make_venue()
    db.add_all([user, venue])
    await db.flush()

    db.add(make_reservation(venue_id=venue.id, user_id=user.id, number_of_guests=0))

    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()
    await db.rollback()


# ---------------------------------------------------------------------------
# 3. Unique constraints
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_duplicate_venue_type_raises(db: AsyncSession) -> None:
    db.add(make_venue_type(type="Bar"))
    await db.flush()

    db.add(make_venue_type(type="Bar"))
    with pytest.raises(IntegrityError):
        await db.flush()
    await db.rollback()


@pytest.mark.asyncio
async def test_duplicate_username_raises(db: AsyncSession) -> None:
    db.add(make_user(username="ana", email="ana@example.com"))
    await db.flush()

    db.add(make_user(username="ana", email="other@example.com"))
    with pytest.raises(IntegrityError):
        await db.flush()
    await db.rollback()


# ---------------------------------------------------------------------------
# 4. Defaults and timestamps
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_new_venue_defaults(db: AsyncSession) -> None:
    db.add(make_venue_type())
    venue = Venue(
        name="Bura Bar",
        location="Senj",
        description="Cocktails",
        working_hours="10:00-02:00",
        maximum_capacity=60,
        venue_type_id=1,
    )
    db.add(venue)
    await db.commit()
    await db.refresh(venue)

    assert venue.average_rating == 0.0
    assert venue.created_at is not None
    assert venue.updated_at is not None
