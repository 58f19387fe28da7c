"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Annotated

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.config import settings
from venuehub.db.session import get_db
from venuehub.services.geolocation import Geocoder, GeoNamesClient


def current_time() -> datetime:
    """The instant a request is served at; overridden in tests to pin the window."""
    return datetime.now(UTC)


async def get_geocoder() -> AsyncIterator[Geocoder]:
    """Per-request GeoNames client; the HTTP connection pool closes with the request."""
    async with httpx.AsyncClient(
        base_url=settings.geonames_base_url,
        timeout=settings.geocoding_timeout,
    ) as http:
        yield GeoNamesClient(http, settings.geonames_username, settings.geonames_max_rows)


DB = Annotated[AsyncSession, Depends(get_db)]
Now = Annotated[datetime, Depends(current_time)]
GeocoderDep = Annotated[Geocoder, Depends(get_geocoder)]
