"""
List-request parsing and the two pagination strategies.

- `NativeSort`: the store sorts and pages; its `pageInfo` is returned as is.
- `VirtualSort`: the sort key is computed locally (e.g. average rating), so
  the whole filtered table (up to the superset ceiling) is fetched in `Id`
  order, decorated, sorted by a total tie-break key and sliced in memory.

Filters are always pushed down to the store through `where`, so totals and
slices are computed over the filtered set in both strategies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal, Mapping, Protocol, Sequence

from fastapi import Query

from .errors import ValidationError
from .records import SUPERSET_CEILING, RecordClient

Record = dict[str, Any]
Decorate = Callable[[Record], Record]


@dataclass(frozen=True)
class ListQuery:
    page: int = 1
    limit: int = 10
    search: str = ""
    sort: str = "Id"
    order: Literal["asc", "desc"] = "asc"
    filters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.order == "desc"

    def sort_expression(self) -> str:
        return f"-{self.sort}" if self.descending else self.sort

    def with_filters(self, **filters: Any) -> ListQuery:
        kept = {k: v for k, v in filters.items() if v is not None and v != ""}
        return replace(self, filters={**self.filters, **kept})


def list_query(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=SUPERSET_CEILING),
    search: str = Query("", max_length=200),
    sort: str = Query("Id", min_length=1, max_length=100),
    order: Literal["asc", "desc"] = Query("asc"),
) -> ListQuery:
    """
    FastAPI dependency: the common list parameters as a typed `ListQuery`.
    """
    return ListQuery(page=page, limit=limit, search=search.strip(), sort=sort.strip(), order=order)


def optional_int(name: str, raw: str | None) -> int | None:
    """
    Parse an optional integer filter; blank means "not given".
    """
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def optional_bool(raw: str | None) -> bool | None:
    value = (raw or "").strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def build_page_info(total_rows: int, page: int, limit: int) -> dict[str, Any]:
    return {
        "totalRows": total_rows,
        "page": page,
        "pageSize": limit,
        "isFirstPage": page == 1,
        "isLastPage": (page - 1) * limit + limit >= total_rows,
    }


def paginate_in_memory(items: Sequence[Any], page: int, limit: int) -> dict[str, Any]:
    start = (page - 1) * limit
    return {
        "list": list(items[start : start + limit]),
        "pageInfo": build_page_info(len(items), page, limit),
    }


class PaginationStrategy(Protocol):
    async def fetch(
        self,
        records: RecordClient,
        table: str,
        query: ListQuery,
        *,
        where: str,
        decorate: Decorate,
    ) -> dict[str, Any]: ...


class NativeSort:
    async def fetch(
        self,
        records: RecordClient,
        table: str,
        query: ListQuery,
        *,
        where: str,
        decorate: Decorate,
    ) -> dict[str, Any]:
        result = await records.list(
            table,
            page=query.page,
            limit=query.limit,
            where=where,
            sort=query.sort_expression(),
        )
        return {
            "list": [decorate(row) for row in result.get("list") or []],
            "pageInfo": result.get("pageInfo"),
        }


@dataclass(frozen=True)
class VirtualSort:
    """
    `sort_key` must give a total order (end the tuple with `Id`). The whole
    key follows the requested direction.
    """

    sort_key: Callable[[Record], tuple]
    ceiling: int = SUPERSET_CEILING

    async def fetch(
        self,
        records: RecordClient,
        table: str,
        query: ListQuery,
        *,
        where: str,
        decorate: Decorate,
    ) -> dict[str, Any]:
        rows = await records.fetch_superset(table, where=where, sort="Id", ceiling=self.ceiling)
        decorated = [decorate(row) for row in rows]
        decorated.sort(key=self.sort_key, reverse=query.descending)
        return paginate_in_memory(decorated, query.page, query.limit)


NATIVE_SORT = NativeSort()


def select_strategy(
    query: ListQuery,
    virtual_fields: Mapping[str, PaginationStrategy] | None = None,
) -> PaginationStrategy:
    return (virtual_fields or {}).get(query.sort, NATIVE_SORT)


async def paginate(
    records: RecordClient,
    table: str,
    query: ListQuery,
    *,
    where: str = "",
    decorate: Decorate = dict,
    virtual_fields: Mapping[str, PaginationStrategy] | None = None,
) -> dict[str, Any]:
    strategy = select_strategy(query, virtual_fields)
    return await strategy.fetch(records, table, query, where=where, decorate=decorate)
