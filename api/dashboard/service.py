"""
Dashboard aggregates: table counts and chart series.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any

from core import transform
from core.records import RecordClient

COUNTED_TABLES = ("locations", "festivals", "accounts", "items")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
REGISTRATION_WINDOW_DAYS = 7


async def table_counts(records: RecordClient) -> dict[str, int]:
    counts = await asyncio.gather(*(records.count(table) for table in COUNTED_TABLES))
    return dict(zip(COUNTED_TABLES, counts))


def _parse_date(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def location_type_counts(locations: list[dict[str, Any]]) -> list[dict[str, Any]]:
    counter: Counter[str] = Counter()
    for location in locations:
        counter.update(str(t) for t in transform.parse_json_list(location.get("types")))
    return [{"type": name, "count": count} for name, count in counter.items()]


def festivals_by_month(festivals: list[dict[str, Any]]) -> list[dict[str, Any]]:
    counts = [0] * 12
    for festival in festivals:
        when = _parse_date(festival.get("event_time"))
        if when is not None:
            counts[when.month - 1] += 1
    return [{"month": name, "count": counts[i]} for i, name in enumerate(MONTH_NAMES)]


def registrations_by_day(accounts: list[dict[str, Any]], today: date) -> list[dict[str, Any]]:
    """
    Sign-ups per day for the trailing window ending `today`, oldest first.
    """
    created = [str(acc.get("CreatedAt")) for acc in accounts if acc.get("CreatedAt")]
    series = []
    for days_back in range(REGISTRATION_WINDOW_DAYS - 1, -1, -1):
        day = (today - timedelta(days=days_back)).isoformat()
        series.append({"date": day, "count": sum(1 for c in created if c.startswith(day))})
    return series


async def chart_data(records: RecordClient, *, today: date | None = None) -> dict[str, Any]:
    locations, festivals, accounts = await asyncio.gather(
        records.fetch_superset("locations", fields="Id,types"),
        records.fetch_superset("festivals", fields="Id,event_time"),
        records.fetch_superset("accounts", fields="Id,CreatedAt"),
    )
    today = today or datetime.now(timezone.utc).date()
    return {
        "locationTypes": location_type_counts(locations),
        "festivalsByMonth": festivals_by_month(festivals),
        "userRegistrations": registrations_by_day(accounts, today),
    }
