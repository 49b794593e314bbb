"""Vertical drag-to-reorder gesture over a list of task rows."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from uuid import UUID

from taskdesk.client.order_state import ClientOrderState, OrderSnapshot

logger = logging.getLogger(__name__)

DEFAULT_ROW_HEIGHT = 48.0


class DragError(RuntimeError):
    """A gesture method was called out of sequence."""


@dataclass
class _Gesture:
    item_id: UUID
    snapshot: OrderSnapshot
    # Sibling centres from the layout at gesture start
    sibling_centres: list[tuple[UUID, float]]
    start_centre: float
    start_y: float
    current_ids: list[UUID]


class DragSurface:
    """Turns pointer steps into reorder previews and a single drag end.

    Rows are stacked top to bottom with `row_height`, or with per-item
    heights from `row_heights`. The surface is inert unless edit mode is on.
    `visible_ids` supplies the rendered rows when some ids in the order
    state have no row.
    """

    def __init__(
        self,
        order_state: ClientOrderState,
        on_drag_end: Callable[[list[UUID]], None] | None = None,
        row_height: float = DEFAULT_ROW_HEIGHT,
        row_heights: Mapping[UUID, float] | None = None,
        edit_mode: bool = False,
        visible_ids: Callable[[], list[UUID]] | None = None,
    ):
        self.order_state = order_state
        self.on_drag_end = on_drag_end
        self.visible_ids = visible_ids
        self.row_height = row_height
        self.row_heights = dict(row_heights or {})
        self._edit_mode = edit_mode
        self._gesture: _Gesture | None = None

    @property
    def edit_mode(self) -> bool:
        return self._edit_mode

    @edit_mode.setter
    def edit_mode(self, enabled: bool) -> None:
        if not enabled and self._gesture is not None:
            logger.debug("Edit mode turned off during drag, cancelling")
            self.cancel()
        self._edit_mode = enabled

    @property
    def is_dragging(self) -> bool:
        return self._gesture is not None

    @property
    def snapshot(self) -> OrderSnapshot | None:
        """Pre-drag state of the active gesture."""
        return self._gesture.snapshot if self._gesture else None

    def _height(self, item_id: UUID) -> float:
        return self.row_heights.get(item_id, self.row_height)

    def _centres(self, ids: list[UUID]) -> dict[UUID, float]:
        centres = {}
        top = 0.0
        for item_id in ids:
            height = self._height(item_id)
            centres[item_id] = top + height / 2
            top += height
        return centres

    def pointer_down(self, item_id: UUID, y: float) -> bool:
        """Start dragging `item_id`; returns False when the surface is disabled."""
        if not self._edit_mode:
            return False
        if self._gesture is not None:
            raise DragError("A drag is already in progress")

        ids = self.visible_ids() if self.visible_ids is not None else self.order_state.ids
        if item_id not in ids:
            raise DragError(f"Item {item_id} is not in the list")

        centres = self._centres(ids)
        snapshot = self.order_state.begin_change()
        self._gesture = _Gesture(
            item_id=item_id,
            snapshot=snapshot,
            sibling_centres=[(i, centres[i]) for i in ids if i != item_id],
            start_centre=centres[item_id],
            start_y=y,
            current_ids=ids,
        )
        return True

    def pointer_move(self, y: float) -> list[UUID]:
        """Move the dragged row and preview the resulting order."""
        gesture = self._require_gesture()
        centre = gesture.start_centre + (y - gesture.start_y)

        target = sum(1 for _, sibling_centre in gesture.sibling_centres if sibling_centre < centre)
        new_ids = [i for i, _ in gesture.sibling_centres]
        new_ids.insert(target, gesture.item_id)

        gesture.current_ids = new_ids
        self.order_state.set_order(new_ids)
        return list(new_ids)

    def release(self) -> list[UUID]:
        """Finish the gesture and emit the drag end with the final order.

        The local change stays pending until the caller settles it.
        """
        gesture = self._require_gesture()
        self._gesture = None
        ids = list(gesture.current_ids)
        if self.on_drag_end is not None:
            self.on_drag_end(ids)
        return ids

    def cancel(self) -> None:
        """Abort the gesture and restore the pre-drag order."""
        if self._gesture is None:
            return
        gesture = self._gesture
        self._gesture = None
        self.order_state.rollback(gesture.snapshot)
        self.order_state.settle()

    def _require_gesture(self) -> _Gesture:
        if self._gesture is None:
            raise DragError("No drag in progress")
        return self._gesture
