"""
Async client for the hosted record store (NocoDB v2 REST API).

One `RecordClient` is built at startup from an immutable `StoreConfig` and
closed on shutdown (see `api/main.py`). Request handlers receive it through
the `get_records` dependency.

Used endpoints (per table):
- GET    /api/v2/tables/{id}/records        ?offset&limit&where&sort&fields
- GET    /api/v2/tables/{id}/records/{Id}
- POST   /api/v2/tables/{id}/records         body: fields
- PATCH  /api/v2/tables/{id}/records         body: {"Id": ..., fields}
- DELETE /api/v2/tables/{id}/records         body: [{"Id": ...}]
- GET    /api/v2/tables/{id}/records/count   ?where

Every call is retried on connection failures, timeouts, 429 and 5xx with
exponential backoff (1s, 2s, ...). Other 4xx responses fail immediately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx
from fastapi import Request
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import StoreConfig
from .errors import PermanentStoreError, TransientStoreError, UnknownTableError

logger = logging.getLogger(__name__)

# The store refuses pages larger than this.
STORE_MAX_PAGE_SIZE = 100

SUPERSET_CEILING = 1000

Sleep = Callable[[float], Awaitable[None]]


def _is_transient_status(status_code: int) -> bool:
    return status_code == 429 or 500 <= status_code < 600


class RecordClient:
    def __init__(
        self,
        config: StoreConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"xc-token": config.api_token, "Content-Type": "application/json"},
            timeout=config.timeout_s,
            transport=transport,
        )

    @property
    def config(self) -> StoreConfig:
        return self._config

    async def aclose(self) -> None:
        await self._http.aclose()

    def table_path(self, table: str) -> str:
        table_id = self._config.tables.get(table)
        if not table_id:
            raise UnknownTableError(f"Unknown table: {table}")
        return f"/api/v2/tables/{table_id}/records"

    async def _send_once(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        try:
            resp = await self._http.request(method, path, params=params, json=body)
        except httpx.TransportError as exc:
            raise TransientStoreError(f"Record store unreachable: {method} {path}: {exc}") from exc

        if resp.status_code >= 400:
            # Avoid dumping huge bodies; include a small snippet.
            message = f"Record store request failed: {method} {path} {resp.status_code} {resp.text[:300]}"
            if _is_transient_status(resp.status_code):
                raise TransientStoreError(message, store_status=resp.status_code)
            raise PermanentStoreError(message, store_status=resp.status_code)

        if not resp.content:
            return None
        return resp.json()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        policy = self._config.retry
        retrying = AsyncRetrying(
            stop=stop_after_attempt(policy.attempts),
            wait=wait_exponential(multiplier=policy.initial_backoff_s),
            retry=retry_if_exception_type(TransientStoreError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                data = await self._send_once(method, path, params=params, body=body)
        return data

    async def list(
        self,
        table: str,
        *,
        page: int = 1,
        limit: int = 25,
        where: str = "",
        sort: str = "",
        fields: str = "",
    ) -> dict[str, Any]:
        """
        Fetch one page. The store's `{list, pageInfo}` is returned as received.
        """
        params: dict[str, Any] = {"offset": (page - 1) * limit, "limit": limit}
        if where:
            params["where"] = where
        if sort:
            params["sort"] = sort
        if fields:
            params["fields"] = fields
        data = await self._request("GET", self.table_path(table), params=params)
        return data or {"list": [], "pageInfo": {}}

    async def fetch_superset(
        self,
        table: str,
        *,
        where: str = "",
        sort: str = "",
        fields: str = "",
        ceiling: int = SUPERSET_CEILING,
    ) -> list[dict[str, Any]]:
        """
        Read every matching row up to `ceiling`, one store page at a time.

        Tables larger than the ceiling are silently truncated.
        """
        rows: list[dict[str, Any]] = []
        page = 1
        while len(rows) < ceiling:
            page_size = min(STORE_MAX_PAGE_SIZE, ceiling)
            data = await self.list(
                table,
                page=page,
                limit=page_size,
                where=where,
                sort=sort,
                fields=fields,
            )
            batch = data.get("list") or []
            rows.extend(batch)
            page_info = data.get("pageInfo") or {}
            if page_info.get("isLastPage", True) or len(batch) < page_size:
                break
            page += 1
        return rows[:ceiling]

    async def get_by_id(self, table: str, record_id: int | str) -> dict[str, Any] | None:
        path = f"{self.table_path(table)}/{record_id}"
        try:
            data = await self._request("GET", path)
        except PermanentStoreError as exc:
            if exc.store_status == 404:
                return None
            raise
        return data or None

    async def create(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", self.table_path(table), body=data)

    async def update(self, table: str, record_id: int | str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Partial update; only the given fields change. The store takes the id in the body.
        """
        body = {**data, "Id": int(record_id)}
        return await self._request("PATCH", self.table_path(table), body=body)

    async def delete(self, table: str, record_id: int | str) -> Any:
        return await self._request("DELETE", self.table_path(table), body=[{"Id": int(record_id)}])

    async def count(self, table: str, where: str = "") -> int:
        params = {"where": where} if where else None
        data = await self._request("GET", f"{self.table_path(table)}/count", params=params)
        return int((data or {}).get("count") or 0)


def get_records(request: Request) -> RecordClient:
    client = getattr(request.app.state, "records", None)
    if client is None:
        raise RuntimeError("Record client is not initialized. Build it on startup.")
    return client
