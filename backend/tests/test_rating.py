"""Unit tests for average-rating arithmetic."""

import math

import pytest

from tests.factories import make_rating
from venuehub.models import Rating
from venuehub.services.rating import incorporate_rating, recompute_average


def _ratings(*values: float) -> list[Rating]:
    return [make_rating(venue_id=1, rating=v) for v in values]


def test_recompute_without_ratings_is_zero() -> None:
    assert recompute_average([]) == 0.0


def test_recompute_is_arithmetic_mean() -> None:
    assert recompute_average(_ratings(5.0, 4.0, 3.0, 5.0)) == pytest.approx(4.25)


def test_recompute_guards_non_finite_results() -> None:
    assert recompute_average(_ratings(math.inf, -math.inf)) == 0.0


def test_incorporate_single_prior_rating() -> None:
    assert incorporate_rating(_ratings(4.0), 3.0) == pytest.approx(3.5)


def test_incorporate_into_empty_history_is_the_new_rating() -> None:
    assert incorporate_rating([], 3.0) == 3.0


@pytest.mark.parametrize(
    "existing, new",
    [
        ((), 0.5),
        ((5.0,), 5.0),
        ((4.5, 0.5, 3.0), 2.5),
        ((1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0), 0.5),
    ],
)
def test_incorporate_matches_recompute_with_new_rating(existing: tuple[float, ...], new: float) -> None:
    expected = recompute_average(_ratings(*existing, new))
    assert incorporate_rating(_ratings(*existing), new) == pytest.approx(expected)
