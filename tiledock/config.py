"""
Grid Configuration

Sizes of the grid the layout lives on.
"""

from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass
class GridConfig:
    """Layout engine configuration."""

    # Grid extent in cells; the usable coordinate space is square
    rows: int = 32
    cols: int = 32

    # Pixel sizes used to convert pointer deltas into cells
    cell_size: int = 40
    gap_size: int = 2

    # Validate the committed layout after every change
    debug: bool = False

    def __post_init__(self):
        """Validate sizes."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError(
                f"Invalid grid extent: {self.rows}x{self.cols}. Rows and cols must be >= 1"
            )
        if self.cell_size <= 0:
            raise ValueError(f"Invalid cell size: {self.cell_size}. Must be > 0")
        if self.gap_size < 0:
            raise ValueError(f"Invalid gap size: {self.gap_size}. Must be >= 0")
        if os.getenv("TILEDOCK_DEBUG"):
            self.debug = True

    @property
    def grid_size(self) -> int:
        """Side length of the square coordinate space used for clamping."""
        return max(self.rows, self.cols)
