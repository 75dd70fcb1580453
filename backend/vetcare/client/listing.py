"""Module: listing.

Client half of the list contract: request serialization, response
normalization and the pagination window shown under every table.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

PAGE_SIZES = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 20
PAGE_WINDOW = 5

# Filter values meaning "no filter"; never sent.
UNSET_FILTER_VALUES = ("", "ALL")


@dataclass
class Page:
    items: list[Any]
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total_pages: int = 1
    total_count: int = 0

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0


def _wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def serialize_filters(filters: Mapping[str, Any]) -> dict[str, Any]:
    params = {"page": 1}
    for key, value in filters.items():
        if value is None:
            continue
        if isinstance(value, str) and value in UNSET_FILTER_VALUES:
            continue
        params[key] = _wire_value(value)
    return params


def _first(source: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if source.get(key) is not None:
            return source[key]
    return None


def normalize_page(payload: Any) -> Page:
    """Accept ``{data, meta}``, ``{data, pagination}``, a bare list or an empty body."""
    if payload is None:
        return Page(items=[])
    if isinstance(payload, list):
        return Page(items=payload, limit=len(payload) or DEFAULT_PAGE_SIZE, total_count=len(payload))

    items = list(payload.get("data") or [])
    if "meta" in payload:
        info = payload["meta"] or {}
        page = _first(info, "currentPage", "page")
        limit = _first(info, "itemsPerPage", "perPage", "limit")
    else:
        info = payload.get("pagination") or {}
        page = _first(info, "page", "currentPage")
        limit = _first(info, "limit", "itemsPerPage")

    total_count = _first(info, "totalCount", "total")
    return Page(
        items=items,
        page=int(page or 1),
        limit=int(limit or DEFAULT_PAGE_SIZE),
        total_pages=int(info.get("totalPages") or 0) or 1,
        total_count=int(total_count if total_count is not None else len(items)),
    )


def page_window(current: int, total: int) -> list[int]:
    if total <= PAGE_WINDOW:
        return list(range(1, total + 1))
    if current <= 3:
        return list(range(1, PAGE_WINDOW + 1))
    if current >= total - 2:
        return list(range(total - PAGE_WINDOW + 1, total + 1))
    return list(range(current - 2, current + 3))


@dataclass
class ListState:
    """Filter/pagination state of one list screen."""

    filters: dict[str, Any] = field(default_factory=dict)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def set_filter(self, key: str, value: Any) -> None:
        if key == "page":
            self.set_page(value)
            return
        if key == "limit":
            self.set_limit(value)
            return
        if self.filters.get(key) != value:
            self.filters[key] = value
            self.page = 1

    def set_page(self, page: int) -> None:
        self.page = max(1, int(page))

    def set_limit(self, limit: int) -> None:
        if limit not in PAGE_SIZES:
            raise ValueError(f"Page size must be one of {PAGE_SIZES}")
        if limit != self.limit:
            self.limit = limit
            self.page = 1

    def params(self) -> dict[str, Any]:
        return serialize_filters({**self.filters, "page": self.page, "limit": self.limit})
