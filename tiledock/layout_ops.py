"""
Layout Mutators

Direct, non-drag operations on a layout. Each function takes a layout and
returns a new one; the input is never modified.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Callable

from .errors import InvariantViolation
from .model import Layout, Module, Window


def _map_window(
    layout: Layout, window_id: str, fn: Callable[[Window], Window]
) -> Layout:
    return Layout(
        tuple(fn(window) if window.id == window_id else window for window in layout)
    )


def select_tab(layout: Layout, window_id: str, module_id: str) -> Layout:
    """Make ``module_id`` the acting module of a window.

    No-op if the window does not exist.

    Raises:
        InvariantViolation: If the window exists but does not hold the module
    """
    window = layout.find_window(window_id)
    if window is None:
        return layout
    if not window.has_module(module_id):
        raise InvariantViolation(
            f"Cannot select {module_id!r}: not a module of window {window_id!r}"
        )
    return _map_window(
        layout, window_id, lambda w: replace(w, acting_module_id=module_id)
    )


def close_tab(layout: Layout, window_id: str, module_id: str) -> Layout:
    """
    Remove a module from a window.

    If it was the acting module, the first remaining module becomes acting.
    A window left without modules stays in the layout; closing it is up to
    the caller.
    """
    if layout.find_window(window_id) is None:
        return layout
    return _map_window(layout, window_id, lambda w: w.without_module(module_id))


def close_window(layout: Layout, window_id: str) -> Layout:
    """Remove a window together with all its modules."""
    if layout.find_window(window_id) is None:
        return layout
    return Layout(tuple(window for window in layout if window.id != window_id))


def resize_window(layout: Layout, window_id: str, width: int, height: int) -> Layout:
    """Set a window's size in cells. Values are expected to be snapped already."""
    if width < 1 or height < 1:
        raise InvariantViolation(
            f"Cannot resize window {window_id!r} to {width}x{height}"
        )
    if layout.find_window(window_id) is None:
        return layout
    return _map_window(
        layout, window_id, lambda w: replace(w, width=width, height=height)
    )


def add_window(layout: Layout, window: Window) -> Layout:
    """Append a window to the layout (it renders on top)."""
    if layout.find_window(window.id) is not None:
        raise InvariantViolation(f"Window {window.id!r} already exists")
    for module in window.modules:
        if layout.find_module(module.id) is not None:
            raise InvariantViolation(f"Module {module.id!r} already exists")
    return Layout(layout.windows + (window,))


def add_module(layout: Layout, window_id: str, module: Module) -> Layout:
    """Append a module as the last tab of a window.

    The module becomes acting if the window had no acting module.
    """
    layout.require_window(window_id)
    if layout.find_module(module.id) is not None:
        raise InvariantViolation(f"Module {module.id!r} already exists")

    def _add(window: Window) -> Window:
        added = window.with_module(module)
        if added.acting_module_id is None:
            added = replace(added, acting_module_id=module.id)
        return added

    return _map_window(layout, window_id, _add)


def remove_module(layout: Layout, module_id: str) -> Layout:
    """Remove a module from whichever window owns it."""
    window = layout.require_module_window(module_id)
    return close_tab(layout, window.id, module_id)


def clear_transient(layout: Layout) -> Layout:
    """Mark every window as permanent."""
    if not any(window.is_transient for window in layout):
        return layout
    return Layout(
        tuple(
            replace(window, is_transient=False) if window.is_transient else window
            for window in layout
        )
    )
