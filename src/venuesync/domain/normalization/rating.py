"""Star ratings and review counts."""

from __future__ import annotations

MIN_RATING = 0.0
MAX_RATING = 5.0


def normalize_rating(value: float | None) -> float | None:
    """Rating on the five-star scale rounded to one decimal; out of range is absent."""

    if value is None or isinstance(value, bool):
        return None
    rating = float(value)
    if not MIN_RATING <= rating <= MAX_RATING:
        return None
    return round(rating, 1)


def normalize_review_count(value: int | None) -> int | None:
    if value is None or isinstance(value, bool) or value < 0:
        return None
    return int(value)
