"""
Drag Transitions

Pure functions turning a drag event plus the current layout into the next
layout. ``drag_over`` runs for every target change while a gesture is in
flight and only ever moves modules between windows; ``drag_end`` runs once
when the gesture is dropped and applies moves, merges and resizes.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import ClassVar, List, Optional, Sequence, Tuple, TypeVar, Union

from .errors import InvariantViolation
from .geometry import Delta, GridGeometry, snap_move, snap_resize
from .hit_test import DropZone, is_eligible
from .ids import IdFactory
from .layout_ops import clear_transient
from .log import get_logger
from .model import DraggableKind, Layout, Window

log = get_logger("transitions")

T = TypeVar("T")


@dataclass(frozen=True)
class ModuleDrag:
    """A tab being dragged. ``item_id`` is the module id."""

    kind: ClassVar[DraggableKind] = DraggableKind.MODULE

    item_id: str
    geometry: GridGeometry
    target: Optional[DropZone] = None
    delta: Delta = Delta()


@dataclass(frozen=True)
class WindowDrag:
    """A window dragged by its title grip. ``item_id`` is the window id."""

    kind: ClassVar[DraggableKind] = DraggableKind.WINDOW

    item_id: str
    geometry: GridGeometry
    target: Optional[DropZone] = None
    delta: Delta = Delta()


@dataclass(frozen=True)
class ResizeDrag:
    """A window's resize handle being dragged. ``item_id`` is the window id."""

    kind: ClassVar[DraggableKind] = DraggableKind.WINDOW_RESIZER

    item_id: str
    geometry: GridGeometry
    target: Optional[DropZone] = None
    delta: Delta = Delta()


DragEvent = Union[ModuleDrag, WindowDrag, ResizeDrag]

EVENT_TYPES = {
    DraggableKind.MODULE: ModuleDrag,
    DraggableKind.WINDOW: WindowDrag,
    DraggableKind.WINDOW_RESIZER: ResizeDrag,
}


def make_event(
    kind: DraggableKind,
    item_id: str,
    geometry: GridGeometry,
    target: Optional[DropZone] = None,
    delta: Delta = Delta(),
) -> DragEvent:
    """Build the event variant matching ``kind``."""
    return EVENT_TYPES[kind](item_id, geometry, target, delta)


def move_item(items: Sequence[T], old_index: int, new_index: int) -> Tuple[T, ...]:
    """
    Move one element to a new index, shifting the ones in between by one.

    A negative ``new_index`` counts from the end of the original sequence, so
    -1 places the element last.
    """
    result: List[T] = list(items)
    if new_index < 0:
        new_index += len(result)
    result.insert(new_index, result.pop(old_index))
    return tuple(result)


def drag_over(layout: Layout, event: DragEvent, new_id: IdFactory) -> Layout:
    """
    Preview step of a gesture.

    Only module drags change the layout here: a tab hovering over another
    window joins that window, a tab hovering over the empty grid is lifted into
    a new transient window at the dragged geometry.

    Args:
        layout: Current (preview) layout
        event: Drag event with the candidate target
        new_id: Id generator for synthesized windows

    Returns:
        The next preview layout (``layout`` itself when nothing changes)
    """
    if not is_eligible(event.kind, event.target):
        return layout

    if isinstance(event, ModuleDrag):
        return _module_over(layout, event, new_id)

    # Window moves and resizes only preview visually
    return layout


def _module_over(layout: Layout, event: ModuleDrag, new_id: IdFactory) -> Layout:
    target = event.target
    source = layout.require_module_window(event.item_id)
    module = source.modules[source.index_of(event.item_id)]

    over_grid = target.is_grid
    over_other = (
        target.owner_window_id is not None and target.owner_window_id != source.id
    )
    if not (over_grid or over_other):
        return layout

    destination = layout.require_window(target.owner_window_id) if over_other else None

    windows: List[Window] = []
    for window in layout:
        if window.id == source.id:
            remaining = window.without_module(module.id)
            # Transient windows and emptied windows disappear
            if not window.is_transient and remaining.modules:
                windows.append(remaining)
            continue
        if destination is not None and window.id == destination.id:
            windows.append(window.with_module(module))
            continue
        windows.append(window)

    if over_grid:
        geometry = event.geometry
        windows.append(
            Window(
                id=new_id(),
                col=geometry.col,
                row=geometry.row,
                width=geometry.width,
                height=geometry.height,
                modules=(module,),
                acting_module_id=module.id,
                is_transient=True,
            )
        )
        log.debug("Lifted module %s out of window %s", module.id, source.id)
    else:
        log.debug(
            "Moved module %s from window %s to %s", module.id, source.id, destination.id
        )

    return Layout(tuple(windows))


def drag_end(
    layout: Layout, event: DragEvent, cell_size: float, grid_size: int
) -> Layout:
    """
    Commit step of a gesture.

    Args:
        layout: Current (preview) layout
        event: Drag event with the final target and total pointer delta
        cell_size: Pixel size of one grid cell
        grid_size: Side length of the grid in cells

    Returns:
        The committed layout. Unchanged if the target does not accept the
        dragged kind; otherwise no window in it is transient.

    Raises:
        InvariantViolation: If the event references a module or window that
            is not in the layout
    """
    if not is_eligible(event.kind, event.target):
        return layout

    if isinstance(event, ModuleDrag):
        if event.target.is_grid:
            result = _drop_module_on_grid(layout, event, cell_size, grid_size)
        else:
            result = _drop_module_on_tabs(layout, event)
    elif isinstance(event, WindowDrag):
        if event.target.is_grid:
            result = _drop_window_on_grid(layout, event, cell_size, grid_size)
        else:
            result = _merge_windows(layout, event)
    elif isinstance(event, ResizeDrag):
        result = _resize(layout, event, cell_size, grid_size)
    else:
        raise InvariantViolation(f"Unknown drag event {event!r}")

    return clear_transient(result)


def _moved(window: Window, d_col: int, d_row: int) -> Window:
    # Snapping lets a move reach row 0; committed windows start at row 1
    return replace(window, col=window.col + d_col, row=max(1, window.row + d_row))


def _replace_window(layout: Layout, updated: Window) -> Layout:
    return Layout(
        tuple(updated if window.id == updated.id else window for window in layout)
    )


def _drop_module_on_grid(
    layout: Layout, event: ModuleDrag, cell_size: float, grid_size: int
) -> Layout:
    owner = layout.require_module_window(event.item_id)
    d_col, d_row = snap_move(owner, event.delta, cell_size, grid_size)
    placed = _moved(owner, d_col, d_row)
    if placed.acting_module_id is None:
        placed = replace(placed, acting_module_id=event.item_id)
    log.debug("Placed window %s at (%d, %d)", placed.id, placed.col, placed.row)
    return _replace_window(layout, placed)


def _drop_module_on_tabs(layout: Layout, event: ModuleDrag) -> Layout:
    target = event.target
    if target.owner_window_id is None:
        raise InvariantViolation(f"Drop zone {target.key!r} belongs to no window")

    window = layout.require_window(target.owner_window_id)
    old_index = window.index_of(event.item_id)
    if old_index == -1:
        raise InvariantViolation(
            f"Module {event.item_id!r} is not in window {window.id!r}"
        )
    # Unknown target module means "drop at the end"
    new_index = window.index_of(target.id)

    reordered = replace(
        window,
        modules=move_item(window.modules, old_index, new_index),
        acting_module_id=window.acting_module_id or event.item_id,
    )
    return _replace_window(layout, reordered)


def _drop_window_on_grid(
    layout: Layout, event: WindowDrag, cell_size: float, grid_size: int
) -> Layout:
    window = layout.require_window(event.item_id)
    d_col, d_row = snap_move(window, event.delta, cell_size, grid_size)
    return _replace_window(layout, _moved(window, d_col, d_row))


def _merge_windows(layout: Layout, event: WindowDrag) -> Layout:
    dragged = layout.require_window(event.item_id)
    target_id = event.target.owner_window_id or event.target.id
    if target_id == dragged.id:
        return layout
    target = layout.require_window(target_id)

    merged = replace(
        target,
        modules=target.modules + dragged.modules,
        acting_module_id=target.acting_module_id or dragged.acting_module_id,
    )
    if merged.acting_module_id is None and merged.modules:
        merged = replace(merged, acting_module_id=merged.modules[0].id)
    log.debug("Merged window %s into %s", dragged.id, target.id)
    return Layout(
        tuple(
            merged if window.id == target.id else window
            for window in layout
            if window.id != dragged.id
        )
    )


def _resize(
    layout: Layout, event: ResizeDrag, cell_size: float, grid_size: int
) -> Layout:
    window = layout.require_window(event.item_id)
    d_width, d_height = snap_resize(
        window, event.delta, cell_size, grid_size, kind=event.kind
    )
    resized = replace(
        window, width=window.width + d_width, height=window.height + d_height
    )
    return _replace_window(layout, resized)
