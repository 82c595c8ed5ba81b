"""
Tests for LayoutController, TileDock and the demo entry point.
"""

import pytest
from pubsub import pub
from pubsub.core import Publisher

from tiledock import topics
from tiledock.__main__ import main
from tiledock.config import GridConfig
from tiledock.dock import TileDock
from tiledock.errors import InvariantViolation
from tiledock.geometry import Delta, Point
from tiledock.ids import counter_ids
from tiledock.layout_controller import LayoutController
from tiledock.model import DraggableKind, Layout


class LayoutRecorder:
    def __init__(self):
        self.layouts = []
        pub.subscribe(self.on_changed, topics.LAYOUT_CHANGED)

    def on_changed(self, layout):
        self.layouts.append(layout)


@pytest.fixture
def recorder():
    return LayoutRecorder()


@pytest.fixture
def controller(two_windows):
    return LayoutController(bus=pub, layout=two_windows, validate=True)


@pytest.fixture
def dock(two_windows):
    return TileDock(GridConfig(), two_windows, id_factory=counter_ids("w"))


def cell_center(col, row, cell=40, gap=2):
    step = cell + gap
    return Point((col - 1) * step + gap + cell / 2, (row - 1) * step + gap + cell / 2)


@pytest.mark.unit
class TestLayoutController:
    """Test command handling over the bus."""

    def test_select_tab_command(self, controller, recorder):
        pub.sendMessage(topics.CMD_SELECT_TAB, window_id="A", module_id="m2")

        assert controller.layout.find_window("A").acting_module_id == "m2"
        assert recorder.layouts == [controller.layout]

    def test_close_tab_command(self, controller):
        pub.sendMessage(topics.CMD_CLOSE_TAB, window_id="A", module_id="m1")

        assert controller.layout.find_window("A").module_ids() == ["m2"]

    def test_close_window_command(self, controller):
        pub.sendMessage(topics.CMD_CLOSE_WINDOW, window_id="B")

        assert controller.layout.window_ids() == ["A"]

    def test_resize_window_command(self, controller):
        pub.sendMessage(topics.CMD_RESIZE_WINDOW, window_id="B", width=4, height=5)

        window = controller.layout.find_window("B")
        assert (window.width, window.height) == (4, 5)

    def test_noop_is_not_published(self, controller, recorder):
        controller.select_tab("Z", "m1")

        assert recorder.layouts == []

    def test_commit_validates(self, controller, make_window):
        broken = Layout((make_window("A", ["m1"]), make_window("B", ["m1"], col=5)))

        with pytest.raises(InvariantViolation):
            controller.commit(broken)
        assert controller.layout.window_ids() == ["A", "B"]

    def test_add_module(self, controller, make_module):
        controller.add_module("B", make_module("m4"))

        assert controller.layout.find_window("B").module_ids() == ["m3", "m4"]


@pytest.mark.unit
class TestTileDock:
    """Test pointer-level gestures against registered zones."""

    def test_move_tab_with_pointer(self, dock, recorder):
        a = dock.layout.require_window("A")
        # Left edge of B's tab strip is its first tab
        pointer = Point(90, 6)

        dock.rebuild_zones()
        assert dock.pointer_down(DraggableKind.MODULE, "m1", a.geometry)
        dock.pointer_move(pointer, Delta(80, 0))
        dock.rebuild_zones()
        result = dock.pointer_up(pointer, Delta(80, 0))

        assert result is dock.layout
        assert dock.layout.find_window("A").module_ids() == ["m2"]
        assert dock.layout.find_window("B").module_ids() == ["m1", "m3"]
        assert recorder.layouts == [dock.layout]

    def test_lifted_tab_stays_out_of_committed_layout(self, dock):
        a = dock.layout.require_window("A")
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.MODULE, "m2", a.geometry)

        preview = dock.pointer_move(cell_center(10, 10), Delta(360, 360))

        assert preview.window_ids() == ["A", "B", "w1"]
        assert dock.view() is preview
        assert dock.layout.window_ids() == ["A", "B"]

        dock.pointer_cancel()
        assert dock.view() is dock.layout
        assert dock.layout.find_window("A").module_ids() == ["m1", "m2"]

    def test_extract_tab_to_grid(self, dock):
        a = dock.layout.require_window("A")
        pointer = cell_center(10, 1)
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.MODULE, "m2", a.geometry)
        dock.pointer_move(pointer, Delta(360, 0))
        dock.rebuild_zones()

        dock.pointer_up(pointer, Delta(360, 0))

        placed = dock.layout.find_window("w1")
        assert (placed.col, placed.row) == (10, 1)
        assert placed.module_ids() == ["m2"]
        assert not placed.is_transient

    def test_lifted_tab_can_be_put_back(self, dock):
        a = dock.layout.require_window("A")
        strip = Point(50, 10)
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.MODULE, "m1", a.geometry)

        dock.pointer_move(cell_center(10, 10), Delta(360, 360))
        dock.rebuild_zones()
        assert dock.hit_test(strip).owner_window_id == "A"

        dock.pointer_move(strip, Delta(40, 0))
        dock.rebuild_zones()
        dock.pointer_up(strip, Delta(40, 0))

        assert dock.layout.window_ids() == ["A", "B"]
        assert dock.layout.find_window("A").module_ids() == ["m1", "m2"]
        assert not any(window.is_transient for window in dock.layout)

    def test_window_merge(self, dock):
        b = dock.layout.require_window("B")
        pointer = cell_center(1, 2)
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.WINDOW, "B", b.geometry)

        dock.pointer_up(pointer, Delta(-80, 40))

        assert dock.layout.window_ids() == ["A"]
        assert dock.layout.find_window("A").module_ids() == ["m1", "m2", "m3"]

    def test_hit_test_skips_dragged_window(self, dock):
        b = dock.layout.require_window("B")
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.WINDOW, "B", b.geometry)

        zone = dock.hit_test(cell_center(3, 2))

        assert zone.is_grid

    def test_resize_with_pointer(self, dock):
        b = dock.layout.require_window("B")
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.WINDOW_RESIZER, "B", b.geometry)

        dock.pointer_up(cell_center(20, 20), Delta(40, 40))

        window = dock.layout.find_window("B")
        assert (window.width, window.height) == (3, 4)

    def test_pointer_without_gesture(self, dock):
        layout = dock.layout

        assert dock.pointer_move(Point(5, 5), Delta(1, 1)) is layout
        assert dock.pointer_up(Point(5, 5), Delta(1, 1)) is layout

    def test_drop_outside_grid_cancels(self, dock):
        a = dock.layout.require_window("A")
        dock.rebuild_zones()
        dock.pointer_down(DraggableKind.MODULE, "m2", a.geometry)
        dock.pointer_move(cell_center(10, 10), Delta(360, 360))

        dock.pointer_up(Point(-50, -50), Delta(-100, -100))

        assert not dock.drag_manager.is_active()
        assert dock.layout.window_ids() == ["A", "B"]

    def test_direct_commands(self, dock):
        dock.select_tab("A", "m2")
        dock.resize_window("A", 4, 4)
        dock.close_tab("B", "m3")
        dock.close_window("B")

        a = dock.layout.require_window("A")
        assert a.acting_module_id == "m2"
        assert (a.width, a.height) == (4, 4)
        assert dock.layout.window_ids() == ["A"]

    def test_zones_follow_view(self, dock):
        dock.rebuild_zones()

        assert dock.zones.get("grid") is not None
        assert dock.zones.get("m3-tab").owner_window_id == "B"


@pytest.mark.unit
class TestDemo:
    def test_runs(self, capsys):
        assert main([]) == 0

        out = capsys.readouterr().out
        assert "# m2 extracted to (6, 1)" in out
        assert '"col": 6' in out

    def test_rejects_bad_sizes(self):
        with pytest.raises(SystemExit):
            main(["--cell-size", "0"])


@pytest.mark.unit
class TestSeparateBuses:
    """Docks given their own publishers do not see each other's traffic."""

    def test_commands_stay_on_own_bus(self, two_windows):
        first = TileDock(layout=two_windows, bus=Publisher())
        second = TileDock(layout=two_windows, bus=Publisher())

        first.bus.sendMessage(topics.CMD_CLOSE_WINDOW, window_id="A")

        assert first.layout.window_ids() == ["B"]
        assert second.layout.window_ids() == ["A", "B"]

    def test_default_bus_is_not_used(self, two_windows):
        dock = TileDock(layout=two_windows, bus=Publisher())

        pub.sendMessage(topics.CMD_CLOSE_WINDOW, window_id="A")

        assert dock.layout.window_ids() == ["A", "B"]

    def test_drag_events_go_to_own_bus(self, two_windows):
        bus = Publisher()
        started = []

        def on_started(kind, item_id):
            started.append(item_id)

        bus.subscribe(on_started, topics.DRAG_STARTED)
        dock = TileDock(layout=two_windows, bus=bus)

        b = two_windows.require_window("B")

        dock.pointer_down(DraggableKind.WINDOW, "B", b.geometry)

        assert started == ["B"]
