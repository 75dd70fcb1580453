"""Module: pagination.

Server half of the list contract shared by every collection endpoint:
``page``/``limit``/``search`` in, ``{data, meta}`` out.
"""

import math
from typing import Any, Sequence

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import Session

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_SEARCH_TERMS = 5


class ListQuery(BaseModel):
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# Dependency provider: shared page/limit/search query parameters.
def list_query(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(default=None),
) -> ListQuery:
    return ListQuery(page=page, limit=limit, search=search)


def search_terms(search: str | None) -> list[str]:
    if not search:
        return []
    return search.split()[:MAX_SEARCH_TERMS]


def apply_search(stmt: Select, search: str | None, columns: Sequence[Any]) -> Select:
    """Every whitespace-separated term must match at least one column (case-insensitive)."""
    terms = search_terms(search)
    if not terms:
        return stmt
    clauses = [or_(*(column.ilike(f"%{term}%") for column in columns)) for term in terms]
    return stmt.where(and_(*clauses))


def build_page_meta(total_count: int, page: int, limit: int) -> dict[str, int]:
    return {
        "totalCount": total_count,
        "currentPage": page,
        "totalPages": math.ceil(total_count / limit) if limit else 0,
        "itemsPerPage": limit,
    }


def paginate(db: Session, stmt: Select, query: ListQuery) -> tuple[list[Any], int]:
    total = db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()
    rows = db.execute(stmt.offset(query.offset).limit(query.limit)).scalars().all()
    return rows, int(total or 0)


def page_response(data: list[Any], total_count: int, query: ListQuery) -> dict[str, Any]:
    return {"data": data, "meta": build_page_meta(total_count, query.page, query.limit)}
