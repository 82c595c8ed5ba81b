"""
tiledock

A docking/tiling layout engine: tabbed windows on a fixed-size grid, moved,
merged, split and resized by drag gestures.

This package provides:
- Immutable layout model (modules, windows, layouts)
- Grid snapping for move and resize gestures
- Drop zone hit testing
- Drag transitions (tab reorder, tab move, tab extraction, window move,
  window merge, window resize)
- A drag session manager that keeps preview-only windows out of the
  committed layout

Example usage:
    from tiledock import TileDock, GridConfig, Layout

    dock = TileDock(GridConfig(rows=32, cols=32, cell_size=40), Layout.from_data(items))
    dock.rebuild_zones()
    dock.pointer_down(DraggableKind.MODULE, "m1", window.geometry)
    dock.pointer_move(pointer, delta)
    dock.pointer_up(pointer, delta)

Or run the demo directly:
    python -m tiledock
"""

__version__ = "0.1.0"

from .errors import TileDockError, InvariantViolation

from .geometry import (
    Point,
    Delta,
    Rect,
    GridGeometry,
    clamp,
    snap_move,
    snap_resize,
)

from .model import (
    ModuleType,
    DraggableKind,
    Module,
    Window,
    Layout,
    validate_layout,
)

from .hit_test import (
    GRID_ID,
    ZoneKind,
    DropZone,
    ZoneRegistry,
    ZoneMetrics,
    is_eligible,
    resolve,
    zones_for_layout,
)

from .transitions import (
    ModuleDrag,
    WindowDrag,
    ResizeDrag,
    drag_over,
    drag_end,
)

from .ids import uuid_ids, counter_ids
from .config import GridConfig
from .layout_controller import LayoutController
from .drag_manager import DragManager, DragOperation
from .dock import TileDock

from . import topics

__all__ = [
    # Version
    "__version__",
    # Errors
    "TileDockError",
    "InvariantViolation",
    # Geometry
    "Point",
    "Delta",
    "Rect",
    "GridGeometry",
    "clamp",
    "snap_move",
    "snap_resize",
    # Model
    "ModuleType",
    "DraggableKind",
    "Module",
    "Window",
    "Layout",
    "validate_layout",
    # Hit testing
    "GRID_ID",
    "ZoneKind",
    "DropZone",
    "ZoneRegistry",
    "ZoneMetrics",
    "is_eligible",
    "resolve",
    "zones_for_layout",
    # Transitions
    "ModuleDrag",
    "WindowDrag",
    "ResizeDrag",
    "drag_over",
    "drag_end",
    # Components
    "uuid_ids",
    "counter_ids",
    "GridConfig",
    "LayoutController",
    "DragManager",
    "DragOperation",
    "TileDock",
    # Event topics
    "topics",
]
