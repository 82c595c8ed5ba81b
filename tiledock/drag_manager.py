"""
Drag Manager

Owns the lifecycle of the single active drag gesture:
begin -> preview (repeated) -> commit or cancel.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from pubsub import pub

from . import topics
from .geometry import Delta, GridGeometry
from .hit_test import DropZone, is_eligible
from .kinds import DraggableKind
from .log import get_logger
from .transitions import drag_end, drag_over, make_event

if TYPE_CHECKING:
    from .ids import IdFactory
    from .model import Layout

log = get_logger("drag")


@dataclass
class DragOperation:
    """The active gesture and its private preview layout.

    Windows lifted out mid-drag live only in ``preview``; the committed layout
    never sees them unless the gesture commits. ``geometry`` is the dragged
    item's last-known geometry: for a tab it follows the window the tab
    currently sits in within the preview.
    """

    kind: DraggableKind
    item_id: str
    geometry: GridGeometry
    preview: Layout
    target: Optional[DropZone] = None


class DragManager:
    """Manages drag gestures over the layout.

    This component publishes DRAG_STARTED, DRAG_PREVIEWED, DRAG_COMMITTED and
    DRAG_CANCELLED. It reads the committed layout through ``get_layout_fn`` and
    hands results back through ``commit_fn``.
    """

    def __init__(
        self,
        get_layout_fn: Callable[[], "Layout"],
        commit_fn: Callable[["Layout"], None],
        metrics_fn: Callable[[], Tuple[float, int]],
        new_id: "IdFactory",
        bus=pub,
    ):
        """Initialize drag manager.

        Args:
            get_layout_fn: Function returning the committed layout
            commit_fn: Function replacing the committed layout
            metrics_fn: Function returning (cell_size, grid_size)
            new_id: Id generator for windows lifted out during a drag
            bus: Event bus instance (Pypubsub) the lifecycle topics go to
        """
        self.current: Optional[DragOperation] = None
        self._get_layout = get_layout_fn
        self._commit = commit_fn
        self._metrics = metrics_fn
        self._new_id = new_id
        self.bus = bus

    def is_active(self) -> bool:
        """Check if a gesture is currently active."""
        return self.current is not None

    def get_kind(self) -> Optional[DraggableKind]:
        return self.current.kind if self.current else None

    def view(self) -> Layout:
        """Layout to render: the preview while dragging, else the committed one."""
        if self.current is not None:
            return self.current.preview
        return self._get_layout()

    def begin(self, kind: DraggableKind, item_id: str, geometry: GridGeometry) -> bool:
        """Start a gesture.

        Args:
            kind: What is being dragged
            item_id: Module id for tabs, window id for windows and resize handles
            geometry: Grid geometry of the dragged item at gesture start

        Returns:
            True if the gesture started, False if one is already active
        """
        if self.current is not None:
            return False

        self.current = DragOperation(
            kind=kind,
            item_id=item_id,
            geometry=geometry,
            preview=self._get_layout(),
        )
        log.debug("Drag started: %s %s", kind.value, item_id)
        self._publish(topics.DRAG_STARTED, self.current)
        return True

    def over(
        self,
        target: Optional[DropZone],
        delta: Delta = Delta(),
        geometry: Optional[GridGeometry] = None,
    ) -> Layout:
        """Handle the pointer moving over a (possibly new) target.

        The preview only changes when the target differs from the last one.
        ``geometry`` replaces the dragged item's last-known geometry when the
        caller reports one.

        Returns:
            The preview layout
        """
        if self.current is None:
            return self._get_layout()

        if geometry is not None:
            self.current.geometry = geometry
        if not self._same_target(target):
            self._preview(target, delta)
        return self.current.preview

    def end(
        self,
        target: Optional[DropZone],
        delta: Delta = Delta(),
        geometry: Optional[GridGeometry] = None,
    ) -> Layout:
        """Drop the dragged item on ``target`` and commit the result.

        Dropping on a target that does not accept the dragged kind cancels
        the gesture instead.

        Returns:
            The committed layout
        """
        if self.current is None:
            return self._get_layout()

        operation = self.current
        if not is_eligible(operation.kind, target):
            log.debug("Drop on ineligible target %s", target.key if target else None)
            self.cancel()
            return self._get_layout()

        try:
            if geometry is not None:
                operation.geometry = geometry
            if not self._same_target(target):
                self._preview(target, delta)
            event = make_event(
                operation.kind, operation.item_id, operation.geometry, target, delta
            )
            cell_size, grid_size = self._metrics()
            result = drag_end(operation.preview, event, cell_size, grid_size)
        except Exception:
            # A broken gesture must not leave its preview active
            self.current = None
            raise

        self.current = None
        self._commit(result)
        log.debug("Drag committed: %s %s", operation.kind.value, operation.item_id)
        self._publish(topics.DRAG_COMMITTED, operation)
        return result

    def cancel(self):
        """Abandon the active gesture. The committed layout is left as it was."""
        if self.current is None:
            return
        operation = self.current
        self.current = None
        log.debug("Drag cancelled: %s %s", operation.kind.value, operation.item_id)
        self._publish(topics.DRAG_CANCELLED, operation)

    def _same_target(self, target: Optional[DropZone]) -> bool:
        previous = self.current.target
        if previous is None or target is None:
            return previous is target
        return previous.key == target.key

    def _preview(self, target: Optional[DropZone], delta: Delta):
        operation = self.current
        event = make_event(
            operation.kind, operation.item_id, operation.geometry, target, delta
        )
        operation.target = target
        preview = drag_over(operation.preview, event, self._new_id)
        if operation.kind is DraggableKind.MODULE:
            owner = preview.find_module_window(operation.item_id)
            if owner is not None:
                operation.geometry = owner.geometry
        if preview is not operation.preview:
            operation.preview = preview
            self._publish(topics.DRAG_PREVIEWED, self.current)

    def _publish(self, topic: str, operation: DragOperation):
        self.bus.sendMessage(topic, kind=operation.kind, item_id=operation.item_id)
