"""
Reviews service.

Reviews are not a table of their own: each location and festival carries a
`reviews` JSON array. This module flattens both sources into one list,
reduces them into statistics, and deletes single entries in place.

Deletion is read-modify-write of the whole array with an unconditional
store update. Two concurrent deletions on the same parent can overwrite
each other; the store offers no conditional update to guard against it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from core import facets, transform
from core.errors import IndexOutOfRangeError, NotFoundError, ValidationError
from core.pagination import paginate_in_memory
from core.ratings import review_score, round_1
from core.records import RecordClient

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("user", "sourceName", "comment")


@dataclass(frozen=True)
class ReviewSource:
    table: str
    label: str
    id_prefix: str


LOCATION_SOURCE = ReviewSource(table="locations", label="Location", id_prefix="loc")
FESTIVAL_SOURCE = ReviewSource(table="festivals", label="Festival", id_prefix="fest")

_SOURCES_BY_NAME = {
    "location": LOCATION_SOURCE,
    "locations": LOCATION_SOURCE,
    "festival": FESTIVAL_SOURCE,
    "festivals": FESTIVAL_SOURCE,
}


def resolve_source(name: str) -> ReviewSource:
    source = _SOURCES_BY_NAME.get((name or "").strip().lower())
    if source is None:
        raise ValidationError(f"Unknown review source: {name}")
    return source


def flatten_reviews(source: ReviewSource, parent: dict[str, Any]) -> list[dict[str, Any]]:
    items = []
    for index, review in enumerate(transform.parse_json_list(parent.get("reviews"))):
        review = review if isinstance(review, dict) else {}
        items.append(
            {
                "id": f"{source.id_prefix}-{parent.get('Id')}-{index}",
                "source": source.label,
                "sourceId": parent.get("Id"),
                "sourceName": parent.get("name") or "",
                "user": review.get("name_user_review") or review.get("user") or "Anonymous",
                "rating": review_score(review),
                "comment": review.get("content") or review.get("comment") or "",
                "timeReview": review.get("time_review") or "",
                "reviewIndex": index,
            }
        )
    return items


def _matches(item: dict[str, Any], needle: str) -> bool:
    return any(needle in str(item.get(name) or "").lower() for name in SEARCH_FIELDS)


async def list_reviews(
    records: RecordClient,
    *,
    page: int = 1,
    limit: int = 10,
    search: str = "",
    location_id: int | None = None,
    festival_id: int | None = None,
) -> dict[str, Any]:
    """
    One page of reviews from both sources, highest rating first.

    Filtering by a location excludes every festival review and vice versa.
    """
    locations, festivals = await asyncio.gather(
        records.fetch_superset(LOCATION_SOURCE.table, fields="Id,name,reviews"),
        records.fetch_superset(FESTIVAL_SOURCE.table, fields="Id,name,reviews"),
    )

    items: list[dict[str, Any]] = []
    if festival_id is None:
        for location in locations:
            if location_id is not None and str(location.get("Id")) != str(location_id):
                continue
            items.extend(flatten_reviews(LOCATION_SOURCE, location))
    if location_id is None:
        for festival in festivals:
            if festival_id is not None and str(festival.get("Id")) != str(festival_id):
                continue
            items.extend(flatten_reviews(FESTIVAL_SOURCE, festival))

    needle = (search or "").strip().lower()
    if needle:
        items = [item for item in items if _matches(item, needle)]

    items.sort(key=lambda item: item["rating"], reverse=True)
    return paginate_in_memory(items, page, limit)


async def review_stats(records: RecordClient) -> dict[str, Any]:
    locations, festivals = await asyncio.gather(
        records.fetch_superset(LOCATION_SOURCE.table, fields="reviews"),
        records.fetch_superset(FESTIVAL_SOURCE.table, fields="reviews"),
    )

    counts = {LOCATION_SOURCE.table: 0, FESTIVAL_SOURCE.table: 0}
    total_rating = 0.0
    for table, rows in ((LOCATION_SOURCE.table, locations), (FESTIVAL_SOURCE.table, festivals)):
        for row in rows:
            reviews = transform.parse_json_list(row.get("reviews"))
            counts[table] += len(reviews)
            total_rating += sum(review_score(r) for r in reviews)

    total = counts[LOCATION_SOURCE.table] + counts[FESTIVAL_SOURCE.table]
    return {
        "totalReviews": total,
        "locationReviews": counts[LOCATION_SOURCE.table],
        "festivalReviews": counts[FESTIVAL_SOURCE.table],
        "averageRating": round_1(total_rating / total) if total else 0,
    }


async def source_names(records: RecordClient, source: ReviewSource) -> list[dict]:
    return await facets.names(records, source.table)


async def delete_review(
    records: RecordClient,
    source_name: str,
    source_id: int,
    review_index: int,
) -> None:
    source = resolve_source(source_name)
    parent = await records.get_by_id(source.table, source_id)
    if parent is None:
        raise NotFoundError("Record not found")

    reviews = transform.parse_json_list(parent.get("reviews"))
    if review_index < 0 or review_index >= len(reviews):
        raise IndexOutOfRangeError("Invalid review index")

    del reviews[review_index]
    await records.update(source.table, source_id, {"reviews": transform.encode_json(reviews)})
    logger.info(
        "review_deleted table=%s source_id=%s index=%s remaining=%s",
        source.table,
        source_id,
        review_index,
        len(reviews),
    )
