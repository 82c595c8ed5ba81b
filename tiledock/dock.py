"""
TileDock

Wires the layout engine together: configuration, event bus, committed layout,
drag gestures and drop zones.
"""

from __future__ import annotations
import os
from typing import Optional

from pubsub import pub

from .config import GridConfig
from .drag_manager import DragManager
from .geometry import Delta, GridGeometry, Point, Rect
from .hit_test import DropZone, ZoneMetrics, ZoneRegistry, zones_for_layout
from .ids import IdFactory, uuid_ids
from .layout_controller import LayoutController
from .log import get_logger
from .model import DraggableKind, Layout

log = get_logger("dock")


class TileDock:
    """A grid of tabbed windows driven by pointer gestures.

    Architecture:
    1. Components share one Pypubsub bus (the default publisher unless one
       is injected) and self-subscribe to their commands
    2. LayoutController owns the committed layout
    3. DragManager owns the active gesture and its preview
    4. ZoneRegistry resolves pointer positions into drop targets
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        layout: Optional[Layout] = None,
        id_factory: Optional[IdFactory] = None,
        bus=pub,
    ):
        self.config = config or GridConfig()
        self.bus = bus

        # Setup debug event logging if enabled
        if os.getenv("TILEDOCK_DEBUG"):
            self.bus.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.layout_controller = LayoutController(
            bus=self.bus,
            layout=layout,
            grid_size=self.config.grid_size,
            validate=self.config.debug,
        )

        self.drag_manager = DragManager(
            get_layout_fn=self.layout_controller.get_layout,
            commit_fn=self.layout_controller.commit,
            metrics_fn=lambda: (self.config.cell_size, self.config.grid_size),
            new_id=id_factory or uuid_ids(),
            bus=self.bus,
        )

        self.zones = ZoneRegistry()

    @property
    def layout(self) -> Layout:
        """The committed layout (never contains preview-only windows)."""
        return self.layout_controller.layout

    def view(self) -> Layout:
        """The layout to render, including the active gesture's preview."""
        return self.drag_manager.view()

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        topic_name = topic.getName()
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        log.debug("EVENT: %s | %s", topic_name, data_str)

    # Lifecycle entry points for UI controls

    def select_tab(self, window_id: str, module_id: str):
        self.layout_controller.select_tab(window_id, module_id)

    def close_tab(self, window_id: str, module_id: str):
        self.layout_controller.close_tab(window_id, module_id)

    def close_window(self, window_id: str):
        self.layout_controller.close_window(window_id)

    def resize_window(self, window_id: str, width: int, height: int):
        self.layout_controller.resize_window(window_id, width, height)

    # Drop zones

    def zone_metrics(
        self,
        origin: Point = Point(),
        viewport: Optional[Rect] = None,
        title_height: float = 24,
        tab_width: float = 80,
    ) -> ZoneMetrics:
        return ZoneMetrics(
            cell_size=self.config.cell_size,
            gap_size=self.config.gap_size,
            grid_size=self.config.grid_size,
            title_height=title_height,
            tab_width=tab_width,
            origin=origin,
            viewport=viewport,
        )

    def rebuild_zones(self, metrics: Optional[ZoneMetrics] = None):
        """Replace the registered drop zones with the standard set for the view."""
        self.zones.clear()
        for zone in zones_for_layout(self.view(), metrics or self.zone_metrics()):
            self.zones.register(zone)

    # Pointer-level gesture handling

    def pointer_down(
        self, kind: DraggableKind, item_id: str, geometry: GridGeometry
    ) -> bool:
        """Start dragging a tab, a window or a resize handle."""
        return self.drag_manager.begin(kind, item_id, geometry)

    def hit_test(self, pointer: Optional[Point]) -> Optional[DropZone]:
        """Zone under the pointer, excluding the dragged item's own zones."""
        operation = self.drag_manager.current
        active_id = operation.item_id if operation else None
        return self.zones.resolve(pointer, active_id)

    def pointer_move(
        self,
        pointer: Optional[Point],
        delta: Delta,
        geometry: Optional[GridGeometry] = None,
    ) -> Layout:
        """Preview the gesture at the pointer's current position."""
        if not self.drag_manager.is_active():
            return self.layout
        return self.drag_manager.over(self.hit_test(pointer), delta, geometry)

    def pointer_up(
        self,
        pointer: Optional[Point],
        delta: Delta,
        geometry: Optional[GridGeometry] = None,
    ) -> Layout:
        """Drop at the pointer's position and commit."""
        if not self.drag_manager.is_active():
            return self.layout
        return self.drag_manager.end(self.hit_test(pointer), delta, geometry)

    def pointer_cancel(self):
        self.drag_manager.cancel()
