"""
Main entry point for running the tiledock demo as a module.

Usage:
    python -m tiledock [--grid-size N] [--cell-size PX] [--gap-size PX]
"""

from __future__ import annotations
import argparse
import json
import sys

from . import GridConfig, TileDock, Layout, DraggableKind, counter_ids
from .geometry import Delta, Point

DEMO_LAYOUT = [
    {
        "id": "A",
        "col": 1,
        "row": 1,
        "width": 2,
        "height": 3,
        "actingModuleId": "m1",
        "modules": [
            {"id": "m1", "type": "price-ladder", "title": "BTC-USD", "props": {}},
            {"id": "m2", "type": "price-ladder", "title": "ETH-BTC", "props": {}},
        ],
    },
    {
        "id": "B",
        "col": 3,
        "row": 1,
        "width": 2,
        "height": 3,
        "actingModuleId": "m3",
        "modules": [
            {"id": "m3", "type": "price-ladder", "title": "BTC Coinbase", "props": {}},
        ],
    },
]


def _snapshot(label: str, dock: TileDock):
    print(f"# {label}")
    print(json.dumps(dock.layout.to_data(), indent=2))


def _cell_center(dock: TileDock, col: int, row: int) -> Point:
    step = dock.config.cell_size + dock.config.gap_size
    half = dock.config.cell_size / 2
    return Point(
        (col - 1) * step + dock.config.gap_size + half,
        (row - 1) * step + dock.config.gap_size + half,
    )


def _drag(
    dock: TileDock,
    kind: DraggableKind,
    item_id: str,
    geometry,
    pointer: Point,
    delta: Delta,
):
    dock.rebuild_zones()
    dock.pointer_down(kind, item_id, geometry)
    dock.pointer_move(pointer, delta)
    # The preview may have moved tabs around; re-register before dropping
    dock.rebuild_zones()
    dock.pointer_up(pointer, delta)


def main(argv=None):
    """Run a scripted session and print the layout after each gesture."""
    parser = argparse.ArgumentParser(
        prog="tiledock", description="Run a scripted tiledock session"
    )
    parser.add_argument(
        "--grid-size", type=int, default=32, help="grid side length in cells"
    )
    parser.add_argument("--cell-size", type=int, default=40, help="cell size in pixels")
    parser.add_argument(
        "--gap-size", type=int, default=2, help="gap between cells in pixels"
    )
    args = parser.parse_args(argv)

    try:
        config = GridConfig(
            rows=args.grid_size,
            cols=args.grid_size,
            cell_size=args.cell_size,
            gap_size=args.gap_size,
        )
    except ValueError as e:
        parser.error(str(e))

    dock = TileDock(config, Layout.from_data(DEMO_LAYOUT), id_factory=counter_ids("w"))
    _snapshot("initial", dock)

    # Drop tab m1 onto B's first tab
    b = dock.layout.require_window("B")
    center = _cell_center(dock, b.col, b.row)
    inset = dock.config.cell_size / 2 - 4
    target = Point(center.x - inset, center.y - inset)
    a = dock.layout.require_window("A")
    _drag(dock, DraggableKind.MODULE, "m1", a.geometry, target, Delta(80, 0))
    _snapshot("m1 moved into B", dock)

    # Pull the last tab of A out onto the empty grid at column 6
    a = dock.layout.require_window("A")
    step = dock.config.cell_size
    pointer = _cell_center(dock, 6, 1)
    _drag(dock, DraggableKind.MODULE, "m2", a.geometry, pointer, Delta(5 * step, 0))
    _snapshot("m2 extracted to (6, 1)", dock)

    # Grow B by one cell in each direction
    b = dock.layout.require_window("B")
    pointer = _cell_center(dock, 10, 10)
    delta = Delta(step, step)
    _drag(dock, DraggableKind.WINDOW_RESIZER, "B", b.geometry, pointer, delta)
    _snapshot("B resized", dock)

    return 0


if __name__ == "__main__":
    sys.exit(main())
