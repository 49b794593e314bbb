"""Offset pagination over SQLAlchemy select statements."""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.schemas.pagination import page_bounds

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching `term` literally anywhere in a value."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    per_page: int | None = None,
) -> tuple[list[Any], dict[str, int]]:
    """Run `query` for one page and return (rows, page bounds).

    When `per_page` is None the whole result is returned as a single page.
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    result = await db.execute(count_query)
    total = result.scalar() or 0

    if per_page is None:
        page = 1
        per_page = max(total, 1)
    else:
        query = query.offset((page - 1) * per_page).limit(per_page)

    result = await db.execute(query)
    rows = list(result.scalars().all())

    return rows, page_bounds(total, page, per_page)
