"""Dashboard and transaction reducers."""

from datetime import date

import pytest

from core.pagination import ListQuery
from dashboard import service as dashboard_service
from transactions import service as transactions_service


@pytest.mark.asyncio
async def test_table_counts(records, store):
    store.seed("locations", [{"Id": 1}, {"Id": 2}])
    store.seed("festivals", [{"Id": 1}])
    store.seed("accounts", [])
    store.seed("items", [{"Id": 1}, {"Id": 2}, {"Id": 3}])

    counts = await dashboard_service.table_counts(records)

    assert counts == {"locations": 2, "festivals": 1, "accounts": 0, "items": 3}


@pytest.mark.asyncio
async def test_chart_data(records, store):
    store.seed(
        "locations",
        [
            {"Id": 1, "types": '["beach","temple"]'},
            {"Id": 2, "types": '["beach"]'},
            {"Id": 3, "types": "garbage"},
        ],
    )
    store.seed(
        "festivals",
        [
            {"Id": 1, "event_time": "2025-02-12"},
            {"Id": 2, "event_time": "2025-02-20T18:00:00Z"},
            {"Id": 3, "event_time": "someday"},
            {"Id": 4, "event_time": ""},
        ],
    )
    store.seed(
        "accounts",
        [
            {"Id": 1, "CreatedAt": "2025-06-10 08:00:00+00:00"},
            {"Id": 2, "CreatedAt": "2025-06-10 21:30:00+00:00"},
            {"Id": 3, "CreatedAt": "2025-06-04 09:00:00+00:00"},
            {"Id": 4, "CreatedAt": "2025-06-03 09:00:00+00:00"},
            {"Id": 5},
        ],
    )

    charts = await dashboard_service.chart_data(records, today=date(2025, 6, 10))

    assert charts["locationTypes"] == [{"type": "beach", "count": 2}, {"type": "temple", "count": 1}]
    months = {entry["month"]: entry["count"] for entry in charts["festivalsByMonth"]}
    assert months["Feb"] == 2
    assert sum(months.values()) == 2
    registrations = charts["userRegistrations"]
    assert [entry["date"] for entry in registrations][0] == "2025-06-04"
    assert registrations[-1] == {"date": "2025-06-10", "count": 2}
    assert registrations[0] == {"date": "2025-06-04", "count": 1}
    assert sum(entry["count"] for entry in registrations) == 3


@pytest.mark.asyncio
async def test_transaction_stats(records, store):
    store.seed(
        "transactions",
        [
            {"Id": 1, "amount": 50000, "status": "PAID"},
            {"Id": 2, "amount": 20000, "status": "pending"},
            {"Id": 3, "amount": -10, "status": "completed"},
            {"Id": 4, "amount": None, "status": "CANCELLED"},
        ],
    )

    stats = await transactions_service.transaction_stats(records)

    assert stats == {
        "totalTransactions": 4,
        "totalAmount": 70000,
        "successfulTransactions": 2,
        "pendingTransactions": 1,
    }


@pytest.mark.asyncio
async def test_transactions_list_fills_missing_full_names(records, store):
    store.seed(
        "transactions",
        [
            {"Id": 1, "orderCode": "A1", "username": "lan", "amount": 10, "status": "PAID"},
            {"Id": 2, "orderCode": "A2", "username": "minh", "fullName": "Tran Minh"},
            {"Id": 3, "orderCode": "A3"},
        ],
    )
    store.seed("accounts", [{"Id": 1, "userName": "lan", "fullName": "Nguyen Lan"}])

    result = await transactions_service.list_transactions(
        records, ListQuery(search="A").with_filters(status="PAID")
    )

    assert [tx["Id"] for tx in result["list"]] == [3, 2, 1]
    assert [tx["fullName"] for tx in result["list"]] == ["", "Tran Minh", "Nguyen Lan"]
    assert result["list"][0]["status"] == "pending"
    first = store.requests[0].url.params
    assert first["sort"] == "-Id"
    assert first["where"] == (
        "((orderCode,like,%A%)~or(fullName,like,%A%)~or(username,like,%A%))~and(status,eq,PAID)"
    )
    assert store.requests[1].url.params["where"] == "(userName,eq,lan)"
