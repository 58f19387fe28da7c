"""Generic pagination types shared by all list endpoints.

Paginated[T]    : raw page as returned by a repository query.
PagedResult[T]  : service-layer envelope handed to routers.
PagedResponse[T]: Pydantic model for HTTP responses (serializable).

Pages are zero-based: ``page=0`` is the first ``size`` rows.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


@dataclass
class Paginated(Generic[T]):
    """One page of rows plus the total row count of the unpaginated query.

    Repositories build these; the pagination assembler turns them into
    ``PagedResult`` after enrichment::

        raw = await list_newest_venues(db, page, size)
        return await assemble_page(db, raw, window)
    """

    items: list[T]
    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


@dataclass
class PagedResult(Generic[T]):
    """Plain dataclass for paginated results leaving the service layer.

    A dataclass instead of a Pydantic model because services shouldn't know
    about serialization. The router validates it into ``PagedResponse``::

        result = await get_new_venues(db, page, size, now)
        return VenuePageResponse.model_validate(result)
    """

    content: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 0
    total_elements: int = 0
    total_pages: int = 0


class PagedResponse(BaseModel, Generic[T]):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` lets ``model_validate`` read a ``PagedResult``
    dataclass directly. Alias per entity::

        VenuePageResponse = PagedResponse[VenueResponse]
    """

    model_config = {"from_attributes": True}

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
