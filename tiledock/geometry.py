"""
Grid Geometry and Snapping

Value types for screen and grid coordinates, and the pure functions that turn
continuous pointer offsets into discrete, bounds-clamped cell offsets.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .kinds import DraggableKind


@dataclass(frozen=True)
class Point:
    """Pointer position in screen coordinates."""

    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class Delta:
    """Pointer movement since the start of a gesture, in pixels."""

    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class Rect:
    """Screen-space rectangle. Right and bottom edges are exclusive."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )

    def intersect(self, other: Rect) -> Optional[Rect]:
        """Return the overlapping part of both rectangles, or None."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.x + self.width, other.x + other.width)
        bottom = min(self.y + self.height, other.y + other.height)
        if right <= left or bottom <= top:
            return None
        return Rect(left, top, right - left, bottom - top)


@dataclass(frozen=True)
class GridGeometry:
    """Position and size of a tile in grid cells (1-based)."""

    col: int
    row: int
    width: int
    height: int


def clamp(value, low, high):
    """Clamp value into [low, high]. The upper bound wins if they cross."""
    return min(max(value, low), high)


def _round_cells(px: float, cell_size: float) -> int:
    # Halves round up, -2.5 -> -2
    return math.floor(px / cell_size + 0.5)


def snap_move(
    dragged, delta: Delta, cell_size: float, grid_size: int
) -> Tuple[int, int]:
    """
    Convert a move gesture's pixel delta into a clamped cell delta.

    Columns are bounded so the tile stays on the grid counting from cell 1;
    rows are bounded one cell further up (to row 0).

    Args:
        dragged: Anything with col, row, width and height (in cells)
        delta: Total pointer movement in pixels
        cell_size: Pixel size of one cell
        grid_size: Side length of the grid in cells

    Returns:
        Tuple of (d_col, d_row)
    """
    d_col = _round_cells(delta.x, cell_size)
    d_row = _round_cells(delta.y, cell_size)

    return (
        clamp(d_col, 1 - dragged.col, grid_size - dragged.col - dragged.width + 1),
        clamp(d_row, -dragged.row, grid_size - dragged.row - dragged.height + 1),
    )


def snap_resize(
    dragged,
    delta: Delta,
    cell_size: float,
    grid_size: int,
    kind: Optional[DraggableKind] = None,
) -> Tuple[float, float]:
    """
    Convert a resize gesture's pixel delta into a clamped size delta.

    The resulting size is at least one cell on each axis and the far edge
    stays inside the grid. If ``kind`` is given and is not the resize handle,
    the pixel delta is returned unchanged.

    Returns:
        Tuple of (d_width, d_height)
    """
    if kind is not None and kind is not DraggableKind.WINDOW_RESIZER:
        return (delta.x, delta.y)

    d_width = _round_cells(delta.x, cell_size)
    d_height = _round_cells(delta.y, cell_size)

    return (
        clamp(d_width, 1 - dragged.width, grid_size - dragged.col - dragged.width + 1),
        clamp(
            d_height, 1 - dragged.height, grid_size - dragged.row - dragged.height + 1
        ),
    )


def cells_to_pixels(cells: int, cell_size: float, gap_size: float) -> float:
    """Pixel extent of a span of cells, including the gaps between them."""
    return cells * cell_size + (cells - 1) * gap_size


def preview_origin(
    dragged,
    d_col: int,
    d_row: int,
    cell_size: float,
    gap_size: float,
    offset: Point = Point(),
) -> Point:
    """Pixel position of a snapped move preview.

    ``offset`` is the grid's on-screen origin minus its scroll position.
    """
    step = cell_size + gap_size
    return Point(
        offset.x + (dragged.col + d_col - 1) * step + gap_size,
        offset.y + (dragged.row + d_row - 1) * step + gap_size,
    )


def grid_pixel_size(grid_size: int, cell_size: float, gap_size: float) -> float:
    """Side length in pixels of the whole grid, including outer padding."""
    return grid_size * (cell_size + gap_size) + gap_size


def grid_span(cell: int, size: int) -> Tuple[int, int]:
    """Start and end grid lines of a track span (end exclusive)."""
    return (cell, cell + size)
