"""Venue request and response schemas.

VenueResponse carries the derived average_rating and available_capacity
the service layer attaches before serialization.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from venuehub.schemas.pagination import PagedResponse


class VenueResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    location: str
    description: str
    working_hours: str
    maximum_capacity: int
    available_capacity: int
    venue_type_id: int
    average_rating: float


VenuePageResponse = PagedResponse[VenueResponse]


class VenueTypeResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    type: str


class RatingResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    venue_id: int
    rating: float
    username: str
    comment: str | None
    created_at: datetime


class AverageRatingResponse(BaseModel):
    venue_id: int
    average_rating: float


class CreateVenueRequest(BaseModel):
    """New venue. Blank strings and non-positive numbers are rejected by the
    service with a failed OperationResult, not by schema validation."""

    name: str
    location: str
    description: str
    working_hours: str
    maximum_capacity: int
    type_id: int


class UpdateVenueRequest(BaseModel):
    """Partial update; omitted fields keep their stored values."""

    name: str | None = None
    location: str | None = None
    description: str | None = None
    working_hours: str | None = None
    maximum_capacity: int | None = None
    type_id: int | None = None


class RateVenueRequest(BaseModel):
    # Range is checked by the service so the caller gets a readable message
    rating: float
    user_id: int = Field(gt=0)
    comment: str | None = Field(default=None, max_length=2000)
