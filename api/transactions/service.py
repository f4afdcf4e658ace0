"""
Donation transactions (read-only).
"""

from __future__ import annotations

from typing import Any

from core import where
from core.pagination import ListQuery
from core.records import RecordClient

TABLE = "transactions"
ACCOUNTS_TABLE = "accounts"

SEARCH_FIELDS = ("orderCode", "fullName", "username")
SUCCESS_STATUSES = {"PAID", "success", "completed"}
PENDING_STATUSES = {"pending", "PENDING"}


def build_where(query: ListQuery) -> str:
    status = query.filters.get("status")
    return where.all_of(
        where.search_any(SEARCH_FIELDS, query.search),
        where.eq("status", status) if status else "",
    )


async def _full_names(records: RecordClient, usernames: set[str]) -> dict[str, str]:
    if not usernames:
        return {}
    accounts = await records.fetch_superset(
        ACCOUNTS_TABLE,
        where=where.any_of(*(where.eq("userName", name) for name in sorted(usernames))),
        fields="userName,fullName",
    )
    return {
        account["userName"]: account.get("fullName") or account["userName"]
        for account in accounts
        if account.get("userName")
    }


def _display(tx: dict[str, Any], full_names: dict[str, str]) -> dict[str, Any]:
    username = tx.get("username") or ""
    return {
        "Id": tx.get("Id"),
        "orderCode": tx.get("orderCode") or "",
        "username": username,
        "fullName": tx.get("fullName") or full_names.get(username) or username,
        "amount": tx.get("amount") or 0,
        "description": tx.get("description") or "",
        "status": tx.get("status") or "pending",
        "CreatedAt": tx.get("CreatedAt"),
        "UpdatedAt": tx.get("UpdatedAt"),
    }


async def list_transactions(records: RecordClient, query: ListQuery) -> dict[str, Any]:
    """
    Newest first. Missing `fullName` values are filled in from `accounts`.
    """
    result = await records.list(
        TABLE,
        page=query.page,
        limit=query.limit,
        where=build_where(query),
        sort="-Id",
    )
    rows = result.get("list") or []
    missing = {tx["username"] for tx in rows if tx.get("username") and not tx.get("fullName")}
    full_names = await _full_names(records, missing)
    return {
        "list": [_display(tx, full_names) for tx in rows],
        "pageInfo": result.get("pageInfo"),
    }


def _amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


async def transaction_stats(records: RecordClient) -> dict[str, Any]:
    rows = await records.fetch_superset(TABLE, fields="Id,amount,status")
    total_amount = 0
    successful = 0
    pending = 0
    for tx in rows:
        amount = _amount(tx.get("amount"))
        if amount > 0:
            total_amount += amount
        status = tx.get("status")
        if status in SUCCESS_STATUSES:
            successful += 1
        elif status in PENDING_STATUSES:
            pending += 1
    return {
        "totalTransactions": len(rows),
        "totalAmount": total_amount,
        "successfulTransactions": successful,
        "pendingTransactions": pending,
    }
