"""
Pytest configuration for the travel admin API.

Provides fixtures for:
- an in-memory record store behind `httpx.MockTransport`
- a `RecordClient` wired to it (retry sleeps are recorded, not slept)
- a FastAPI `TestClient` with the record client injected and a valid token
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlsplit

import httpx
import pytest
from fastapi.testclient import TestClient

from core.config import RetryPolicy, StoreConfig
from core.records import RecordClient

TABLE_IDS = {
    "accounts": "tbl_accounts",
    "locations": "tbl_locations",
    "festivals": "tbl_festivals",
    "items": "tbl_items",
    "objects": "tbl_objects",
    "transactions": "tbl_transactions",
}


def reviews_json(*ratings: int) -> str:
    return json.dumps([{"name_user_review": f"user{i}", "start": r} for i, r in enumerate(ratings)])


class FakeStore:
    """
    Minimal NocoDB v2 records API over in-memory rows.

    `where` is recorded but not evaluated. `fail_with` queues responses
    (status codes or exceptions) returned before normal handling.
    """

    def __init__(self) -> None:
        self.rows: dict[str, list[dict[str, Any]]] = {table_id: [] for table_id in TABLE_IDS.values()}
        self.requests: list[httpx.Request] = []
        self.fail_with: list[int | Exception] = []

    def seed(self, table: str, rows: list[dict[str, Any]]) -> None:
        self.rows[TABLE_IDS[table]] = [dict(row) for row in rows]

    def table(self, table: str) -> list[dict[str, Any]]:
        return self.rows[TABLE_IDS[table]]

    def bodies(self, method: str) -> list[Any]:
        return [json.loads(r.content) for r in self.requests if r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            failure = self.fail_with.pop(0)
            if isinstance(failure, Exception):
                raise failure
            return httpx.Response(failure, json={"msg": "failure"})

        parts = urlsplit(str(request.url)).path.strip("/").split("/")
        # api / v2 / tables / {table_id} / records [/ {id} | / count]
        table_id = parts[3]
        rows = self.rows.setdefault(table_id, [])
        tail = parts[5] if len(parts) > 5 else None

        if request.method == "GET" and tail == "count":
            return httpx.Response(200, json={"count": len(rows)})
        if request.method == "GET" and tail is not None:
            for row in rows:
                if str(row.get("Id")) == tail:
                    return httpx.Response(200, json=row)
            return httpx.Response(404, json={"msg": "Record not found"})
        if request.method == "GET":
            return httpx.Response(200, json=self._page(rows, request.url.params))
        if request.method == "POST":
            data = json.loads(request.content)
            new_id = max((int(r["Id"]) for r in rows), default=0) + 1
            rows.append({**data, "Id": new_id})
            return httpx.Response(200, json={"Id": new_id})
        if request.method == "PATCH":
            data = json.loads(request.content)
            for row in rows:
                if row.get("Id") == data["Id"]:
                    row.update(data)
            return httpx.Response(200, json={"Id": data["Id"]})
        if request.method == "DELETE":
            ids = {item["Id"] for item in json.loads(request.content)}
            self.rows[table_id] = [r for r in rows if r.get("Id") not in ids]
            return httpx.Response(200, json=[{"Id": i} for i in ids])
        return httpx.Response(405)

    def _page(self, rows: list[dict[str, Any]], params: httpx.QueryParams) -> dict[str, Any]:
        offset = int(params.get("offset", 0))
        limit = int(params.get("limit", 25))
        sort = params.get("sort", "")
        ordered = list(rows)
        if sort:
            field = sort.lstrip("-")
            ordered.sort(key=lambda r: r.get(field) or 0, reverse=sort.startswith("-"))
        page = ordered[offset : offset + limit]
        return {
            "list": page,
            "pageInfo": {
                "totalRows": len(rows),
                "page": offset // limit + 1,
                "pageSize": limit,
                "isFirstPage": offset == 0,
                "isLastPage": offset + limit >= len(rows),
            },
        }


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(
        base_url="https://store.test",
        api_token="test-token",
        tables=TABLE_IDS,
        retry=RetryPolicy(attempts=3, initial_backoff_s=1.0),
    )


@pytest.fixture
def records(store: FakeStore, store_config: StoreConfig, sleeps: list[float]) -> RecordClient:
    async def record_sleep(seconds: float) -> None:
        sleeps.append(float(seconds))

    return RecordClient(store_config, transport=httpx.MockTransport(store.handler), sleep=record_sleep)


@pytest.fixture
def auth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@travel.com")
    monkeypatch.setenv("PASSWORD_SALT", "test-salt")


@pytest.fixture
def auth_headers(auth_env: None) -> dict[str, str]:
    from auth import security

    token = security.build_access_token(email="admin@travel.com", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(records: RecordClient, auth_env: None) -> TestClient:
    from core.records import get_records
    from main import app

    app.dependency_overrides[get_records] = lambda: records
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
