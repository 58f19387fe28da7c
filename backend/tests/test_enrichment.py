"""Unit tests for batch venue enrichment.

Repository functions are replaced with AsyncMocks so the number of queries
can be asserted without a database.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from tests.factories import IN_WINDOW, make_rating, make_reservation, make_venue
from venuehub.services import enrichment
from venuehub.services.availability import resolve_window
from venuehub.services.enrichment import VenueSnapshot, enrich_venues

WINDOW = resolve_window(datetime(2026, 5, 10, 18, 40, tzinfo=UTC))


@pytest.fixture
def queries(monkeypatch: pytest.MonkeyPatch) -> tuple[AsyncMock, AsyncMock]:
    ratings = AsyncMock(return_value=[])
    reservations = AsyncMock(return_value=[])
    monkeypatch.setattr(enrichment, "list_ratings_for_venues", ratings)
    monkeypatch.setattr(enrichment, "list_reservations_in_window", reservations)
    return ratings, reservations


@pytest.mark.asyncio
@pytest.mark.parametrize("page_size", [1, 5, 50])
async def test_query_count_is_constant_as_page_grows(
    queries: tuple[AsyncMock, AsyncMock], page_size: int
) -> None:
    ratings, reservations = queries
    venues = [make_venue(id=i, name=f"Venue {i}") for i in range(1, page_size + 1)]

    result = await enrich_venues(AsyncMock(), venues, WINDOW)

    assert len(result) == page_size
    assert ratings.await_count == 1
    assert reservations.await_count == 1
    assert ratings.await_args.args[1] == list(range(1, page_size + 1))
    assert reservations.await_args.args[2] == WINDOW


@pytest.mark.asyncio
async def test_empty_batch_skips_queries(queries: tuple[AsyncMock, AsyncMock]) -> None:
    ratings, reservations = queries

    assert await enrich_venues(AsyncMock(), [], WINDOW) == []
    ratings.assert_not_awaited()
    reservations.assert_not_awaited()


@pytest.mark.asyncio
async def test_stats_are_grouped_per_venue(queries: tuple[AsyncMock, AsyncMock]) -> None:
    ratings, reservations = queries
    ratings.return_value = [
        make_rating(venue_id=1, rating=5.0),
        make_rating(venue_id=2, rating=2.0),
        make_rating(venue_id=1, rating=4.0),
    ]
    reservations.return_value = [
        make_reservation(venue_id=1, number_of_guests=4, reserved_at=IN_WINDOW),
        make_reservation(venue_id=1, number_of_guests=6, reserved_at=IN_WINDOW),
        make_reservation(venue_id=3, number_of_guests=12, reserved_at=IN_WINDOW),
    ]
    venues = [
        make_venue(id=1, maximum_capacity=40),
        make_venue(id=2, maximum_capacity=20),
        make_venue(id=3, maximum_capacity=10),
    ]

    first, second, third = await enrich_venues(AsyncMock(), venues, WINDOW)

    assert (first.average_rating, first.available_capacity) == (4.5, 30)
    assert (second.average_rating, second.available_capacity) == (2.0, 20)
    assert (third.average_rating, third.available_capacity) == (0.0, -2)


@pytest.mark.asyncio
async def test_enrichment_returns_copies_and_keeps_other_fields(
    queries: tuple[AsyncMock, AsyncMock],
) -> None:
    ratings, _ = queries
    ratings.return_value = [make_rating(venue_id=7, rating=3.0)]
    venue = make_venue(id=7, name="Konoba Fiume", location="Rijeka", average_rating=1.0)

    (snapshot,) = await enrich_venues(AsyncMock(), [venue], WINDOW)

    assert isinstance(snapshot, VenueSnapshot)
    assert snapshot.average_rating == 3.0
    assert (snapshot.id, snapshot.name, snapshot.location) == (7, "Konoba Fiume", "Rijeka")
    assert snapshot.maximum_capacity == venue.maximum_capacity
    # The ORM row keeps its stored value
    assert venue.average_rating == 1.0


@pytest.mark.asyncio
async def test_enriching_twice_is_idempotent(queries: tuple[AsyncMock, AsyncMock]) -> None:
    ratings, reservations = queries
    ratings.return_value = [make_rating(venue_id=1, rating=4.0), make_rating(venue_id=1, rating=3.0)]
    reservations.return_value = [make_reservation(venue_id=1, number_of_guests=5)]

    once = await enrich_venues(AsyncMock(), [make_venue(id=1)], WINDOW)
    twice = await enrich_venues(AsyncMock(), once, WINDOW)

    assert once == twice
    assert twice[0].average_rating == 3.5
    assert twice[0].available_capacity == 35
