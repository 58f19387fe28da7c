"""Venue endpoints.

Fixed paths (/venues/nearby, /venues/types...) are declared before
/venues/{venue_id} so they are matched first.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Query

from venuehub.dependencies import DB, GeocoderDep, Now
from venuehub.schemas.result import OperationResponse
from venuehub.schemas.venue import (
    AverageRatingResponse,
    CreateVenueRequest,
    RateVenueRequest,
    RatingResponse,
    UpdateVenueRequest,
    VenuePageResponse,
    VenueResponse,
    VenueTypeResponse,
)
from venuehub.services.venue import (
    VenueChanges,
    VenueDraft,
    create_venue,
    delete_venue,
    get_nearby_venues,
    get_new_venues,
    get_suggested_venues,
    get_trending_venues,
    get_venue_details,
    get_venue_rating,
    get_venue_ratings,
    get_venue_type_name,
    get_venue_types,
    rate_venue,
    search_venues,
    update_venue,
)

router = APIRouter(prefix="/venues", tags=["venues"])

PageNumber = Annotated[int, Query(ge=0, description="Zero-based page index")]
PageSize = Annotated[int, Query(ge=1, le=100)]


@router.get("", response_model=VenuePageResponse)
async def list_venues(
    db: DB,
    now: Now,
    page: PageNumber = 0,
    size: PageSize = 20,
    q: str | None = Query(None, max_length=100, description="Matches venue name or city"),
    type_ids: list[int] | None = Query(None),
) -> VenuePageResponse:
    result = await search_venues(db, page, size, q, type_ids, now)
    return VenuePageResponse.model_validate(result)


@router.get("/nearby", response_model=VenuePageResponse)
async def list_nearby_venues(
    db: DB,
    geocoder: GeocoderDep,
    now: Now,
    page: PageNumber = 0,
    size: PageSize = 20,
    latitude: float | None = Query(None, ge=-90, le=90),
    longitude: float | None = Query(None, ge=-180, le=180),
) -> VenuePageResponse:
    """Venues in the caller's city and cities nearby; the default city without coordinates."""
    result = await get_nearby_venues(db, geocoder, page, size, latitude, longitude, now)
    return VenuePageResponse.model_validate(result)


@router.get("/new", response_model=VenuePageResponse)
async def list_new_venues(
    db: DB, now: Now, page: PageNumber = 0, size: PageSize = 20
) -> VenuePageResponse:
    return VenuePageResponse.model_validate(await get_new_venues(db, page, size, now))


@router.get("/trending", response_model=VenuePageResponse)
async def list_trending_venues(
    db: DB, now: Now, page: PageNumber = 0, size: PageSize = 20
) -> VenuePageResponse:
    return VenuePageResponse.model_validate(await get_trending_venues(db, page, size, now))


@router.get("/suggested", response_model=VenuePageResponse)
async def list_suggested_venues(
    db: DB, now: Now, page: PageNumber = 0, size: PageSize = 20
) -> VenuePageResponse:
    return VenuePageResponse.model_validate(await get_suggested_venues(db, page, size, now))


@router.get("/types", response_model=list[VenueTypeResponse])
async def list_venue_types(db: DB) -> list[VenueTypeResponse]:
    return [VenueTypeResponse.model_validate(t) for t in await get_venue_types(db)]


@router.get("/types/{type_id}", response_model=str)
async def read_venue_type(db: DB, type_id: int) -> str:
    return await get_venue_type_name(db, type_id)


@router.get("/{venue_id}", response_model=VenueResponse)
async def read_venue(db: DB, now: Now, venue_id: int) -> VenueResponse:
    return VenueResponse.model_validate(await get_venue_details(db, venue_id, now))


@router.get("/{venue_id}/rating", response_model=AverageRatingResponse)
async def read_venue_rating(db: DB, venue_id: int) -> AverageRatingResponse:
    average_rating = await get_venue_rating(db, venue_id)
    return AverageRatingResponse(venue_id=venue_id, average_rating=average_rating)


@router.get("/{venue_id}/ratings", response_model=list[RatingResponse])
async def list_venue_ratings(db: DB, venue_id: int) -> list[RatingResponse]:
    return [RatingResponse.model_validate(r) for r in await get_venue_ratings(db, venue_id)]


@router.post("", response_model=OperationResponse)
async def create(db: DB, request: CreateVenueRequest) -> OperationResponse:
    result = await create_venue(db, VenueDraft(**request.model_dump()))
    return OperationResponse.model_validate(result)


@router.patch("/{venue_id}", response_model=OperationResponse)
async def update(
    db: DB,
    now: Now,
    venue_id: int,
    request: UpdateVenueRequest | None = Body(None),
) -> OperationResponse:
    changes = VenueChanges(**request.model_dump()) if request is not None else None
    return OperationResponse.model_validate(await update_venue(db, venue_id, changes, now))


@router.post("/{venue_id}/ratings", response_model=OperationResponse)
async def rate(db: DB, venue_id: int, request: RateVenueRequest) -> OperationResponse:
    result = await rate_venue(db, venue_id, request.rating, request.user_id, request.comment)
    return OperationResponse.model_validate(result)


@router.delete("/{venue_id}", response_model=OperationResponse)
async def delete(db: DB, venue_id: int) -> OperationResponse:
    return OperationResponse.model_validate(await delete_venue(db, venue_id))
