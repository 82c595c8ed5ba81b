"""
Layout Data Model

Modules (tabs), windows (tiles holding modules) and the layout (ordered
sequence of windows). All three are immutable values: every change produces a
new object, so a renderer never observes a half-applied transition.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import InvariantViolation
from .geometry import GridGeometry
from .kinds import DraggableKind  # noqa: F401


class ModuleType(Enum):
    """Renderer selector for a module's content."""

    GREETING = "greeting"
    BUTTON = "button"
    PRICE_LADDER = "price-ladder"


@dataclass(frozen=True)
class Module:
    """A tab's content unit. ``props`` is passed through untouched."""

    id: str
    type: ModuleType
    title: str
    props: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Window:
    """A tile on the grid holding an ordered sequence of modules."""

    id: str
    col: int
    row: int
    width: int
    height: int
    modules: Tuple[Module, ...] = ()
    acting_module_id: Optional[str] = None
    is_transient: bool = False

    def __post_init__(self):
        if not isinstance(self.modules, tuple):
            object.__setattr__(self, "modules", tuple(self.modules))

    @property
    def geometry(self) -> GridGeometry:
        return GridGeometry(self.col, self.row, self.width, self.height)

    def module_ids(self) -> List[str]:
        return [module.id for module in self.modules]

    def index_of(self, module_id: str) -> int:
        """Index of a module in tab order, or -1 if absent."""
        for i, module in enumerate(self.modules):
            if module.id == module_id:
                return i
        return -1

    def has_module(self, module_id: str) -> bool:
        return self.index_of(module_id) != -1

    def with_module(self, module: Module) -> Window:
        """Return a copy with ``module`` appended as the last tab."""
        return replace(self, modules=self.modules + (module,))

    def without_module(self, module_id: str) -> Window:
        """Return a copy without the module.

        If it was the acting module, the first remaining module takes over.
        """
        modules = tuple(m for m in self.modules if m.id != module_id)
        acting = self.acting_module_id
        if acting == module_id:
            acting = modules[0].id if modules else None
        return replace(self, modules=modules, acting_module_id=acting)


@dataclass(frozen=True)
class Layout:
    """Ordered sequence of windows. Order is render order."""

    windows: Tuple[Window, ...] = ()

    def __post_init__(self):
        if not isinstance(self.windows, tuple):
            object.__setattr__(self, "windows", tuple(self.windows))

    def __iter__(self) -> Iterator[Window]:
        return iter(self.windows)

    def __len__(self) -> int:
        return len(self.windows)

    def window_ids(self) -> List[str]:
        return [window.id for window in self.windows]

    def module_ids(self) -> List[str]:
        return [module.id for window in self.windows for module in window.modules]

    def find_window(self, window_id: str) -> Optional[Window]:
        for window in self.windows:
            if window.id == window_id:
                return window
        return None

    def find_module(self, module_id: str) -> Optional[Module]:
        for window in self.windows:
            for module in window.modules:
                if module.id == module_id:
                    return module
        return None

    def find_module_window(self, module_id: str) -> Optional[Window]:
        """Return the window owning a module, or None."""
        for window in self.windows:
            if window.has_module(module_id):
                return window
        return None

    def require_window(self, window_id: str) -> Window:
        window = self.find_window(window_id)
        if window is None:
            raise InvariantViolation(f"Window {window_id!r} not found")
        return window

    def require_module_window(self, module_id: str) -> Window:
        window = self.find_module_window(module_id)
        if window is None:
            raise InvariantViolation(f"Module {module_id!r} not found in any window")
        return window

    @classmethod
    def from_data(cls, items: Iterable[Dict[str, Any]]) -> Layout:
        """Build a layout from plain data.

        Accepts the camelCase shape used by the front end::

            [{"id": "1", "col": 1, "row": 1, "width": 2, "height": 3,
              "actingModuleId": "m1", "isTransient": False,
              "modules": [{"id": "m1", "type": "price-ladder",
                           "title": "BTC-USD", "props": {}}]}]
        """
        windows = []
        for item in items:
            modules = tuple(
                Module(
                    id=str(m["id"]),
                    type=ModuleType(m["type"]),
                    title=m.get("title", ""),
                    props=dict(m.get("props") or {}),
                )
                for m in item.get("modules", ())
            )
            windows.append(
                Window(
                    id=str(item["id"]),
                    col=int(item["col"]),
                    row=int(item["row"]),
                    width=int(item["width"]),
                    height=int(item["height"]),
                    modules=modules,
                    acting_module_id=item.get("actingModuleId")
                    or (modules[0].id if modules else None),
                    is_transient=bool(item.get("isTransient", False)),
                )
            )
        return cls(tuple(windows))

    def to_data(self) -> List[Dict[str, Any]]:
        """Inverse of :meth:`from_data`."""
        data: List[Dict[str, Any]] = []
        for window in self.windows:
            item: Dict[str, Any] = {
                "id": window.id,
                "col": window.col,
                "row": window.row,
                "width": window.width,
                "height": window.height,
                "modules": [
                    {
                        "id": m.id,
                        "type": m.type.value,
                        "title": m.title,
                        "props": dict(m.props),
                    }
                    for m in window.modules
                ],
            }
            if window.acting_module_id is not None:
                item["actingModuleId"] = window.acting_module_id
            if window.is_transient:
                item["isTransient"] = True
            data.append(item)
        return data


def validate_layout(layout: Layout, grid_size: int, allow_transient: bool = False):
    """
    Check the invariants every committed layout must satisfy.

    Empty non-transient windows are accepted, since callers may close the last
    tab explicitly without closing the window.

    Args:
        layout: Layout to check
        grid_size: Side length of the grid in cells
        allow_transient: Accept preview-only windows (mid-gesture layouts)

    Raises:
        InvariantViolation: Describing the first broken invariant
    """
    seen_windows = set()
    seen_modules = set()

    for window in layout:
        if window.id in seen_windows:
            raise InvariantViolation(f"Duplicate window id {window.id!r}")
        seen_windows.add(window.id)

        if window.width < 1 or window.height < 1:
            raise InvariantViolation(
                f"Window {window.id!r} has size {window.width}x{window.height}"
            )
        if window.col < 1 or window.col + window.width - 1 > grid_size:
            raise InvariantViolation(
                f"Window {window.id!r} columns {window.col}..{window.col + window.width - 1} "
                f"outside grid of {grid_size}"
            )
        if window.row < 1 or window.row + window.height - 1 > grid_size:
            raise InvariantViolation(
                f"Window {window.id!r} rows {window.row}..{window.row + window.height - 1} "
                f"outside grid of {grid_size}"
            )

        for module in window.modules:
            if module.id in seen_modules:
                raise InvariantViolation(
                    f"Module {module.id!r} appears in more than one place"
                )
            seen_modules.add(module.id)

        if window.acting_module_id is not None and not window.has_module(
            window.acting_module_id
        ):
            raise InvariantViolation(
                f"Window {window.id!r} acting module {window.acting_module_id!r} "
                f"is not one of its modules"
            )
        if window.acting_module_id is None and window.modules:
            raise InvariantViolation(f"Window {window.id!r} has modules but no acting module")

        if window.is_transient and not allow_transient:
            raise InvariantViolation(f"Window {window.id!r} is transient")
