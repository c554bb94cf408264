from __future__ import annotations

import pytest

from venuesync.domain.normalization import normalize_rating, normalize_review_count


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(4.5, 4.5), (4.449, 4.4), (0, 0.0), (5, 5.0), (5.2, None), (-1.0, None), (None, None)],
)
def test_normalize_rating(raw: float | None, expected: float | None) -> None:
    assert normalize_rating(raw) == expected


def test_normalize_rating_ignores_booleans() -> None:
    assert normalize_rating(True) is None  # type: ignore[arg-type]


@pytest.mark.parametrize(("raw", "expected"), [(812, 812), (0, 0), (-3, None), (None, None)])
def test_normalize_review_count(raw: int | None, expected: int | None) -> None:
    assert normalize_review_count(raw) == expected
