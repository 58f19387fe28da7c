"""Current-occupancy arithmetic.

A reservation occupies its venue during the half-hour slot its
``reserved_at`` falls into. "Now" is snapped to the same grid, so every
reservation booked for the current slot counts against capacity.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

SLOT_MINUTES = 30


class HasGuests(Protocol):
    number_of_guests: int


class HasMaximumCapacity(Protocol):
    maximum_capacity: int


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[lower_bound, upper_bound)``.

    Reservation queries filter on it through
    ``repositories.reservation.reserved_within``.
    """

    lower_bound: datetime
    upper_bound: datetime


def resolve_window(now: datetime) -> TimeWindow:
    """Return the half-hour slot containing ``now``.

    The lower bound is the latest :00 or :30 mark at or before ``now``; the
    upper bound is the next mark. ``now``'s tzinfo is carried over.

    >>> resolve_window(datetime(2026, 5, 10, 18, 40, 12))
    TimeWindow(lower_bound=datetime.datetime(2026, 5, 10, 18, 30), upper_bound=datetime.datetime(2026, 5, 10, 19, 0))
    """
    minute = now.minute - now.minute % SLOT_MINUTES
    lower = now.replace(minute=minute, second=0, microsecond=0)
    return TimeWindow(lower_bound=lower, upper_bound=lower + timedelta(minutes=SLOT_MINUTES))


def reserved_seats(reservations: Iterable[HasGuests]) -> int:
    return sum(reservation.number_of_guests for reservation in reservations)


def available_capacity(venue: HasMaximumCapacity, reservations: Iterable[HasGuests]) -> int:
    """Seats left at ``venue`` given the reservations active in the window.

    Not clamped at zero: a negative value means the venue is overbooked
    (e.g. its capacity was lowered after reservations were made).
    """
    return venue.maximum_capacity - reserved_seats(reservations)
