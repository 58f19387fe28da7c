"""Turns raw venue pages into enriched ``PagedResult`` envelopes."""

from collections.abc import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.models import Venue
from venuehub.schemas.pagination import Paginated, PagedResult
from venuehub.services.availability import TimeWindow
from venuehub.services.enrichment import VenueSnapshot, enrich_venues


async def assemble_page(
    db: AsyncSession, raw: Paginated[Venue], window: TimeWindow
) -> PagedResult[VenueSnapshot]:
    """Enrich the venues of ``raw`` and wrap them with the page metadata.

    An empty page returns immediately, without enrichment queries.
    """
    if not raw.items:
        return PagedResult(
            content=[], page=raw.page, size=raw.size, total_elements=0, total_pages=0
        )

    content = await enrich_venues(db, raw.items, window)
    return PagedResult(
        content=content,
        page=raw.page,
        size=raw.size,
        total_elements=raw.total,
        total_pages=raw.total_pages,
    )


def order_by_ranking(ranked_ids: Sequence[int], venues: Iterable[Venue]) -> list[Venue]:
    """Arrange ``venues`` in the order of ``ranked_ids``.

    Ids without a matching venue (deleted since the ranking was computed) are
    skipped.
    """
    venues_by_id = {venue.id: venue for venue in venues}
    return [venues_by_id[venue_id] for venue_id in ranked_ids if venue_id in venues_by_id]
