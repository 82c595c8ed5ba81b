"""
Layout Controller

Holds the committed layout and handles direct, non-drag commands
(select tab, close tab, close window, resize window).
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from . import layout_ops
from .log import get_logger
from .model import Layout, validate_layout

if TYPE_CHECKING:
    from .model import Module

log = get_logger("layout")


class LayoutController:
    """Owns the committed layout.

    This component subscribes to command events from UI controls and
    publishes LAYOUT_CHANGED after every change so renderers can redraw.

    Responsibilities:
    - CMD_SELECT_TAB: Make a module the acting tab of its window
    - CMD_CLOSE_TAB: Remove a module from a window
    - CMD_CLOSE_WINDOW: Remove a window and its modules
    - CMD_RESIZE_WINDOW: Set a window's size in cells
    """

    def __init__(
        self,
        bus,
        layout: Optional[Layout] = None,
        grid_size: int = 32,
        validate: bool = False,
    ):
        """Initialize layout controller.

        Args:
            bus: Event bus instance (Pypubsub)
            layout: Initial layout
            grid_size: Side length of the grid in cells
            validate: Check layout invariants on every commit
        """
        self.bus = bus
        self.layout = layout if layout is not None else Layout()
        self.grid_size = grid_size
        self.validate = validate

        if self.validate:
            validate_layout(self.layout, self.grid_size)

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to layout command events."""
        from . import topics

        self.bus.subscribe(self._on_select_tab, topics.CMD_SELECT_TAB)
        self.bus.subscribe(self._on_close_tab, topics.CMD_CLOSE_TAB)
        self.bus.subscribe(self._on_close_window, topics.CMD_CLOSE_WINDOW)
        self.bus.subscribe(self._on_resize_window, topics.CMD_RESIZE_WINDOW)

    def get_layout(self) -> Layout:
        return self.layout

    def commit(self, layout: Layout):
        """Replace the committed layout and notify subscribers."""
        from . import topics

        if layout is self.layout:
            return
        if self.validate:
            validate_layout(layout, self.grid_size)
        self.layout = layout
        self.bus.sendMessage(topics.LAYOUT_CHANGED, layout=layout)

    def select_tab(self, window_id: str, module_id: str):
        self.commit(layout_ops.select_tab(self.layout, window_id, module_id))

    def close_tab(self, window_id: str, module_id: str):
        log.debug("Closing tab %s of window %s", module_id, window_id)
        self.commit(layout_ops.close_tab(self.layout, window_id, module_id))

    def close_window(self, window_id: str):
        log.debug("Closing window %s", window_id)
        self.commit(layout_ops.close_window(self.layout, window_id))

    def resize_window(self, window_id: str, width: int, height: int):
        self.commit(layout_ops.resize_window(self.layout, window_id, width, height))

    def add_module(self, window_id: str, module: "Module"):
        self.commit(layout_ops.add_module(self.layout, window_id, module))

    def _on_select_tab(self, window_id: str, module_id: str):
        """Handle CMD_SELECT_TAB command."""
        self.select_tab(window_id, module_id)

    def _on_close_tab(self, window_id: str, module_id: str):
        """Handle CMD_CLOSE_TAB command."""
        self.close_tab(window_id, module_id)

    def _on_close_window(self, window_id: str):
        """Handle CMD_CLOSE_WINDOW command."""
        self.close_window(window_id)

    def _on_resize_window(self, window_id: str, width: int, height: int):
        """Handle CMD_RESIZE_WINDOW command."""
        self.resize_window(window_id, width, height)
