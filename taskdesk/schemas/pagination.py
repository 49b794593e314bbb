"""Pydantic schemas for paginated list responses."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a list, in the shape list tables consume."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[T]
    from_: int = Field(0, alias="from")
    to: int = 0
    total: int = 0
    per_page: int
    current_page: int = 1
    last_page: int = 1


def page_bounds(total: int, page: int, per_page: int) -> dict[str, int]:
    """Compute from/to/last_page for a page of `per_page` items."""
    last_page = math.ceil(total / per_page) if total > 0 else 1
    start = (page - 1) * per_page + 1
    # Past the last page nothing is shown
    if start > total:
        start, end = 0, 0
    else:
        end = min(page * per_page, total)
    return {
        "from": start,
        "to": end,
        "total": total,
        "per_page": per_page,
        "current_page": page,
        "last_page": last_page,
    }
