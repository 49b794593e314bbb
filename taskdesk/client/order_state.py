"""Client-side display order of a project's tasks."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OrderSnapshot:
    """Sequence to restore when a local change is rolled back."""

    ids: tuple[UUID, ...]
    shadowed: bool


class ClientOrderState:
    """Display order kept in two layers: the server sequence and a local shadow.

    The shadow is only ever replaced wholesale. While a local change is
    pending, fresh server data updates the authoritative layer but the
    shadow keeps being rendered.
    """

    def __init__(self, server_ids: Iterable[UUID] = ()):
        self._server_ids: list[UUID] = list(server_ids)
        self._shadow: list[UUID] | None = None
        self._pending = 0

    @property
    def ids(self) -> list[UUID]:
        """The sequence currently rendered."""
        return list(self._shadow if self._shadow is not None else self._server_ids)

    @property
    def server_ids(self) -> list[UUID]:
        return list(self._server_ids)

    @property
    def has_shadow(self) -> bool:
        return self._shadow is not None

    @property
    def is_pending(self) -> bool:
        return self._pending > 0

    def initialize(self, server_ids: Iterable[UUID]) -> None:
        """Take a fresh server sequence."""
        self._server_ids = list(server_ids)
        if self._pending:
            logger.debug("Local order change pending, keeping shadow order")
            return
        self._shadow = None

    def set_order(self, new_ids: Iterable[UUID]) -> None:
        """Replace the shadow sequence."""
        self._shadow = list(new_ids)

    def begin_change(self) -> OrderSnapshot:
        """Mark a local change pending and return what to roll back to."""
        self._pending += 1
        return OrderSnapshot(ids=tuple(self.ids), shadowed=self._shadow is not None)

    def rollback(self, snapshot: OrderSnapshot) -> None:
        """Restore the sequence captured by `begin_change`."""
        self._shadow = list(snapshot.ids) if snapshot.shadowed else None

    def settle(self) -> None:
        """End a pending local change."""
        if self._pending:
            self._pending -= 1

    def forget(self, item_id: UUID) -> None:
        """Drop an id from the rendered sequence (e.g. after a delete)."""
        if self._shadow is None:
            self._shadow = list(self._server_ids)
        self._shadow = [i for i in self._shadow if i != item_id]

    def resolve(self, items_by_id: Mapping[UUID, T]) -> list[T]:
        """Items in display order; ids without a current item are skipped."""
        return [items_by_id[i] for i in self.ids if i in items_by_id]
