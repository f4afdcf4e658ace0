"""
Review-derived virtual fields shared by locations, festivals and reviews.

Reviews live inside the parent record as a JSON array string of objects such
as `{"name_user_review": ..., "start": 4, "content": ..., "time_review": ...}`.
Older entries use `rating` instead of `start`.
"""

from __future__ import annotations

import math
from typing import Any

from .pagination import VirtualSort
from .transform import parse_json_list


def round_1(value: float) -> float:
    # Half-up, to one decimal.
    return math.floor(value * 10 + 0.5) / 10


def review_score(review: Any) -> float:
    if not isinstance(review, dict):
        return 0
    raw = review.get("start") or review.get("rating") or 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return raw
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0


def average_rating(reviews_json: Any) -> float:
    reviews = parse_json_list(reviews_json)
    if not reviews:
        return 0
    total = sum(review_score(r) for r in reviews)
    return round_1(total / len(reviews))


def review_count(reviews_json: Any) -> int:
    return len(parse_json_list(reviews_json))


def rating_sort_key(record: dict[str, Any]) -> tuple[float, int, int]:
    """
    Rating, then review count, then Id. Expects a record already decorated
    with `calculated_rating` and `review_count`.
    """
    return (
        record.get("calculated_rating") or 0,
        record.get("review_count") or 0,
        int(record.get("Id") or 0),
    )


RATING_SORT = VirtualSort(sort_key=rating_sort_key)

# Sort keys that exist only after decoration.
RATING_VIRTUAL_FIELDS = {
    "rating": RATING_SORT,
    "calculated_rating": RATING_SORT,
}
