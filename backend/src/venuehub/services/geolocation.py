"""Search-area resolution for the nearby-venues listing.

Degrades in three tiers: no coordinates → the default city; coordinates
without known neighbours → the city the user is in; otherwise that city
plus every city within the search radius.
"""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from venuehub.exceptions import GeolocationError
from venuehub.logging import get_logger

logger = get_logger(__name__)


class Geocoder(Protocol):
    async def city_for_coordinates(self, latitude: float, longitude: float) -> str: ...

    async def nearby_cities_within(
        self, latitude: float, longitude: float, radius_km: int
    ) -> list[str] | None: ...


@dataclass(frozen=True)
class DefaultCity:
    city: str

    @property
    def cities(self) -> frozenset[str]:
        return frozenset({self.city})


@dataclass(frozen=True)
class SingleCity:
    city: str

    @property
    def cities(self) -> frozenset[str]:
        return frozenset({self.city})


@dataclass(frozen=True)
class CitySet:
    cities: frozenset[str]


SearchArea = DefaultCity | SingleCity | CitySet


async def resolve_search_area(
    geocoder: Geocoder,
    latitude: float | None,
    longitude: float | None,
    *,
    default_city: str = "Zagreb",
    radius_km: int = 100,
) -> SearchArea:
    """Pick the cities a nearby-venues query should cover.

    Geocoder failures propagate as GeolocationError.
    """
    if latitude is None or longitude is None:
        return DefaultCity(default_city)

    current_city = await geocoder.city_for_coordinates(latitude, longitude)
    nearby = await geocoder.nearby_cities_within(latitude, longitude, radius_km)

    neighbours = set(nearby or ()) - {current_city}
    if not neighbours:
        return SingleCity(current_city)

    return CitySet(frozenset(neighbours | {current_city}))


class GeoNamesClient:
    """Geocoder backed by the GeoNames ``findNearbyPlaceNameJSON`` service.

    The caller owns the ``httpx.AsyncClient`` (base URL and timeout included);
    see dependencies.get_geocoder.
    """

    # Populated places with more than 15000 inhabitants
    CITY_FEATURE_FILTER = "cities15000"

    def __init__(self, http: httpx.AsyncClient, username: str, max_rows: int = 50) -> None:
        self._http = http
        self._username = username
        self._max_rows = max_rows

    async def city_for_coordinates(self, latitude: float, longitude: float) -> str:
        places = await self._nearby_places(latitude, longitude, maxRows=1)
        if not places:
            raise GeolocationError(f"No city found for coordinates ({latitude}, {longitude})")
        return str(places[0]["name"])

    async def nearby_cities_within(
        self, latitude: float, longitude: float, radius_km: int
    ) -> list[str] | None:
        places = await self._nearby_places(
            latitude,
            longitude,
            radius=radius_km,
            maxRows=self._max_rows,
            cities=self.CITY_FEATURE_FILTER,
        )
        # Several places can share a name (districts); keep the first of each
        return list(dict.fromkeys(str(place["name"]) for place in places))

    async def _nearby_places(
        self, latitude: float, longitude: float, **params: Any
    ) -> list[dict[str, Any]]:
        query = {"lat": latitude, "lng": longitude, "username": self._username, **params}
        try:
            response = await self._http.get("/findNearbyPlaceNameJSON", params=query)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("geolocation_request_failed", error=str(exc))
            raise GeolocationError("Geolocation service is unavailable") from exc

        # GeoNames reports quota and auth problems with HTTP 200 and a status object
        if "status" in body:
            message = body["status"].get("message", "unknown error")
            logger.warning("geolocation_lookup_rejected", error=message)
            raise GeolocationError(f"Geolocation lookup failed: {message}")

        places: list[dict[str, Any]] = body.get("geonames", [])
        return places
