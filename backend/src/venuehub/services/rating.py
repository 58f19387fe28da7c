"""Average-rating arithmetic."""

import math
from collections.abc import Sequence
from typing import Protocol


class HasRating(Protocol):
    rating: float


def recompute_average(ratings: Sequence[HasRating]) -> float:
    """Mean of all ratings, or 0.0 when there are none."""
    if not ratings:
        return 0.0
    average = sum(r.rating for r in ratings) / len(ratings)
    return average if math.isfinite(average) else 0.0


def incorporate_rating(existing: Sequence[HasRating], new_rating: float) -> float:
    """Average after ``new_rating`` is added to ``existing``.

    Same result as ``recompute_average`` over the extended sequence; used when
    the new rating is known before it is persisted.
    """
    total = sum(r.rating for r in existing) + new_rating
    return total / (len(existing) + 1)
