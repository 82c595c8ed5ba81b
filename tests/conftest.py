"""
Shared pytest fixtures for tiledock tests.
"""

import pytest
from pubsub import pub

from tiledock.geometry import Rect
from tiledock.hit_test import ALL_KINDS, GRID_ID, TAB_KINDS, DropZone, ZoneKind
from tiledock.model import Layout, Module, ModuleType, Window


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a renderer")


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop every bus subscription made during a test."""
    yield
    pub.unsubAll()


@pytest.fixture
def make_module():
    """Factory fixture for creating modules."""

    def _make(module_id, title=None, module_type=ModuleType.PRICE_LADDER, **props):
        return Module(
            id=module_id, type=module_type, title=title or module_id, props=props
        )

    return _make


@pytest.fixture
def make_window(make_module):
    """Factory fixture for creating windows from module ids."""

    def _make(
        window_id,
        module_ids=(),
        col=1,
        row=1,
        width=2,
        height=3,
        acting=None,
        is_transient=False,
    ):
        modules = tuple(make_module(mid) for mid in module_ids)
        if acting is None and modules:
            acting = modules[0].id
        return Window(
            id=window_id,
            col=col,
            row=row,
            width=width,
            height=height,
            modules=modules,
            acting_module_id=acting,
            is_transient=is_transient,
        )

    return _make


@pytest.fixture
def two_windows(make_window):
    """Window A {1,1,2x3} holding [m1, m2] next to window B {3,1,2x3} holding [m3]."""
    return Layout(
        (
            make_window("A", ["m1", "m2"], col=1, row=1, width=2, height=3),
            make_window("B", ["m3"], col=3, row=1, width=2, height=3),
        )
    )


@pytest.fixture
def grid_zone():
    """Empty-grid drop zone covering a 32x32 grid of 40px cells."""
    return DropZone(
        key=GRID_ID,
        id=GRID_ID,
        kind=ZoneKind.GRID,
        rect=Rect(0, 0, 1280, 1280),
        supports=ALL_KINDS,
    )


@pytest.fixture
def tabs_zone():
    """Factory fixture for a window's tab strip zone."""

    def _make(window_id):
        return DropZone(
            key=f"{window_id}-tabs",
            id=window_id,
            kind=ZoneKind.TABS,
            rect=Rect(0, 0, 80, 24),
            supports=TAB_KINDS,
            owner_window_id=window_id,
        )

    return _make


@pytest.fixture
def tab_zone():
    """Factory fixture for a single tab's zone."""

    def _make(module_id, window_id):
        return DropZone(
            key=f"{module_id}-tab",
            id=module_id,
            kind=ZoneKind.TAB,
            rect=Rect(0, 0, 40, 24),
            supports=TAB_KINDS,
            owner_window_id=window_id,
        )

    return _make


@pytest.fixture
def window_zone():
    """Factory fixture for a window body zone."""

    def _make(window_id):
        return DropZone(
            key=f"{window_id}-window",
            id=window_id,
            kind=ZoneKind.WINDOW,
            rect=Rect(0, 0, 80, 120),
            supports=ALL_KINDS,
            owner_window_id=window_id,
        )

    return _make
