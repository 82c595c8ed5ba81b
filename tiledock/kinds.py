"""Draggable item kinds."""

from enum import Enum


class DraggableKind(Enum):
    """What a drag gesture is carrying. Fixed for the lifetime of a gesture."""

    MODULE = "module"  # A single tab
    WINDOW = "window"  # Whole tile, via its title grip
    WINDOW_RESIZER = "window-resizer"  # The resize handle
