"""Query-string driven paginated table over an API list endpoint."""

import enum
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar
from urllib.parse import parse_qs, urlencode

from taskdesk.client.errors import TaskdeskError
from taskdesk.schemas.pagination import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

FILTER_FIELDS = ("q", "status")


def _positive_int(values: list[str] | None, default: int | None) -> int | None:
    if not values:
        return default
    try:
        number = int(values[0])
    except ValueError:
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class TableQuery:
    """The URL parameters of a list table: search, status filter, paging."""

    q: str | None = None
    status: str | None = None
    page: int = 1
    per_page: int | None = None

    def to_params(self) -> dict[str, str]:
        """Request parameters, leaving out unset values."""
        params = {
            "q": self.q,
            "status": self.status,
            "page": str(self.page),
            "per_page": str(self.per_page) if self.per_page else None,
        }
        return {key: value for key, value in params.items() if value}

    def to_query_string(self) -> str:
        """Serialize to a stable URL query string."""
        return urlencode(sorted(self.to_params().items()))

    @classmethod
    def from_query_string(cls, query_string: str) -> "TableQuery":
        """Parse a URL query string; malformed numbers fall back to defaults."""
        parsed = parse_qs(query_string.lstrip("?"))
        return cls(
            q=(parsed.get("q") or [None])[0] or None,
            status=(parsed.get("status") or [None])[0] or None,
            page=_positive_int(parsed.get("page"), 1),
            per_page=_positive_int(parsed.get("per_page"), None),
        )

    def with_changes(self, **changes: Any) -> "TableQuery":
        """Return a copy with `changes`; changing a filter goes back to page 1."""
        filters_changed = any(
            field in changes and changes[field] != getattr(self, field)
            for field in FILTER_FIELDS
        )
        if filters_changed and "page" not in changes:
            changes["page"] = 1
        return replace(self, **changes)


class TableState(str, enum.Enum):
    """Load state of a table."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Column(Generic[T]):
    """A column definition: header text and a cell renderer for a row item."""

    header: str
    cell: Callable[[T], Any]


class QueryTable(Generic[T]):
    """Renders pages returned by `fetch` for the current TableQuery.

    The table does no filtering or sorting of its own. Results are cached
    per serialized query; failed loads are not cached.
    """

    def __init__(
        self,
        fetch: Callable[[TableQuery], Awaitable[Page[T]]],
        columns: Sequence[Column[T]],
        query: TableQuery | None = None,
        empty_message: str = "No data found.",
    ):
        self._fetch = fetch
        self.columns = list(columns)
        self.empty_message = empty_message
        self._query = query or TableQuery()
        self._cache: dict[str, Page[T]] = {}
        self.state = TableState.LOADING
        self.page: Page[T] | None = None
        self.error: TaskdeskError | None = None

    @property
    def query(self) -> TableQuery:
        return self._query

    @property
    def query_string(self) -> str:
        return self._query.to_query_string()

    def set_query(self, **changes: Any) -> None:
        """Change URL parameters; the table goes back to LOADING."""
        self._query = self._query.with_changes(**changes)
        self.state = TableState.LOADING
        self.error = None

    def go_to_page(self, page: int) -> None:
        self.set_query(page=page)

    def invalidate(self) -> None:
        """Drop cached pages so the next load refetches."""
        self._cache.clear()

    async def load(self) -> None:
        """Load the page for the current query (from cache when possible)."""
        key = self.query_string
        if key in self._cache:
            self.page = self._cache[key]
            self.state = TableState.SUCCESS
            return

        self.state = TableState.LOADING
        try:
            page = await self._fetch(self._query)
        except TaskdeskError as e:
            if key == self.query_string:
                logger.warning(f"Failed to load table page {key!r}: {e.message}")
                self.error = e
                self.state = TableState.ERROR
            return

        self._cache[key] = page
        # The query may have changed while this page was in flight
        if key == self.query_string:
            self.page = page
            self.error = None
            self.state = TableState.SUCCESS

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]

    def rows(self) -> list[list[Any]]:
        """Rendered cells of the current page."""
        if self.state != TableState.SUCCESS or self.page is None:
            return []
        return [[column.cell(item) for column in self.columns] for item in self.page.data]

    @property
    def is_empty(self) -> bool:
        return self.state == TableState.SUCCESS and not self.rows()

    @property
    def show_pagination(self) -> bool:
        return self.state == TableState.SUCCESS and self.page is not None and self.page.last_page > 1
