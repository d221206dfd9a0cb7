"""
Pagination helpers shared by list endpoints.

Every paginated endpoint answers with the same envelope:
``{items, total, page, page_size, total_pages, has_next, has_previous}``.
"""
from typing import Any, Callable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

MAX_PAGE_SIZE = 100


def create_paginated_response(items: List[Any], total: int, page: int, page_size: int) -> dict:
    total_pages = (total + page_size - 1) // page_size if total > 0 else 1
    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_previous": page > 1
    }


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    page_size: int = 20,
    serializer: Optional[Callable[[Any], Any]] = None,
) -> dict:
    """
    Count and slice a select() of ORM rows.

    ``serializer`` converts each row (e.g. ``Schema.model_validate``); rows
    are returned as-is without one.
    """
    page = max(1, page)
    page_size = max(1, min(MAX_PAGE_SIZE, page_size))

    count_stmt = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar() or 0

    result = await db.execute(query.offset((page - 1) * page_size).limit(page_size))
    rows = result.scalars().all()
    items = [serializer(row) for row in rows] if serializer else list(rows)

    return create_paginated_response(items, total, page, page_size)
