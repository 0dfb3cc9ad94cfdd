from __future__ import annotations

from typing import Callable
import unittest

from buyin_graph import BuyInLineGraph, DataPoint, DrawCommands, ObservablePoints, PointsChange


class _CaptureSurface:
    def __init__(self) -> None:
        self.frames: list[DrawCommands] = []

    def draw(self, commands: DrawCommands) -> None:
        self.frames.append(commands)


class _DeferredScheduler:
    def __init__(self) -> None:
        self.pending: list[Callable[[], None]] = []

    def __call__(self, callback: Callable[[], None]) -> None:
        self.pending.append(callback)

    def run(self) -> None:
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


class ObservablePointsTests(unittest.TestCase):
    def test_mutations_notify_subscribers(self) -> None:
        points = ObservablePoints([DataPoint(1.0)])
        changes: list[PointsChange] = []
        points.subscribe(changes.append)

        points.append(DataPoint(2.0))
        points[0] = DataPoint(5.0)
        del points[1]
        points.clear()
        points.reset([DataPoint(7.0)])

        self.assertEqual([c.action for c in changes], ["add", "replace", "remove", "reset", "reset"])
        self.assertEqual(changes[0].index, 1)
        self.assertEqual(changes[0].items, (DataPoint(2.0),))
        self.assertEqual(list(points), [DataPoint(7.0)])

    def test_extend_notifies_per_item(self) -> None:
        points = ObservablePoints()
        changes: list[PointsChange] = []
        points.subscribe(changes.append)
        points.extend([DataPoint(1.0), DataPoint(2.0)])
        self.assertEqual([c.index for c in changes], [0, 1])

    def test_unsubscribe_is_idempotent(self) -> None:
        points = ObservablePoints()
        changes: list[PointsChange] = []
        sub = points.subscribe(changes.append)
        sub.unsubscribe()
        sub.unsubscribe()
        points.append(DataPoint(1.0))
        self.assertFalse(sub.active)
        self.assertEqual(changes, [])


class BuyInLineGraphTests(unittest.TestCase):
    def setUp(self) -> None:
        self.surface = _CaptureSurface()
        self.graph = BuyInLineGraph(self.surface)
        self.graph.resize(200, 100)
        self.surface.frames.clear()

    def test_assigning_points_redraws(self) -> None:
        self.graph.points = ObservablePoints([DataPoint(10.0), DataPoint(20.0)])
        self.assertEqual(len(self.surface.frames), 1)
        self.assertEqual(len(self.surface.frames[0].data_markers), 2)

    def test_collection_mutation_redraws(self) -> None:
        points = ObservablePoints([DataPoint(10.0)])
        self.graph.points = points
        points.append(DataPoint(30.0))
        points.clear()
        self.assertEqual(len(self.surface.frames), 3)
        self.assertEqual(len(self.surface.frames[1].data_markers), 2)
        self.assertTrue(self.surface.frames[2].cleared)

    def test_rebinding_drops_old_subscription(self) -> None:
        old = ObservablePoints([DataPoint(1.0)])
        self.graph.points = old
        self.graph.points = ObservablePoints([DataPoint(2.0)])
        frames = len(self.surface.frames)
        old.append(DataPoint(3.0))
        self.assertEqual(len(self.surface.frames), frames)

    def test_plain_sequences_are_accepted(self) -> None:
        self.graph.points = [5.0, -5.0, 5.0]
        self.assertEqual(len(self.surface.frames[-1].segments), 2)

    def test_mode_change_redraws_only_on_change(self) -> None:
        self.graph.points = [DataPoint(-5.0), DataPoint(5.0)]
        self.graph.is_profit_mode = True
        self.graph.is_profit_mode = True
        self.assertEqual(len(self.surface.frames), 2)
        self.assertEqual(self.surface.frames[-1].mode, "profit")
        self.assertIsNotNone(self.surface.frames[-1].reference_line)

    def test_resize_redraws_with_new_size(self) -> None:
        self.graph.points = [DataPoint(1.0), DataPoint(2.0)]
        self.graph.resize(400, 50)
        last = self.surface.frames[-1]
        self.assertEqual((last.canvas_width, last.canvas_height), (400.0, 50.0))

    def test_detach_stops_listening(self) -> None:
        points = ObservablePoints([DataPoint(1.0)])
        self.graph.points = points
        self.graph.detach()
        points.append(DataPoint(2.0))
        self.assertEqual(len(self.surface.frames), 1)


class FirstLayoutTests(unittest.TestCase):
    def test_first_render_deferred_until_measured(self) -> None:
        surface = _CaptureSurface()
        scheduler = _DeferredScheduler()
        graph = BuyInLineGraph(surface, scheduler=scheduler)

        graph.on_layout(0, 0)
        self.assertFalse(graph.loaded)
        self.assertEqual(scheduler.pending, [])

        graph.on_layout(320, 120)
        self.assertTrue(graph.loaded)
        self.assertEqual(surface.frames, [])
        self.assertEqual(len(scheduler.pending), 1)

        scheduler.run()
        self.assertEqual(len(surface.frames), 1)
        self.assertTrue(surface.frames[0].cleared)
        self.assertEqual(surface.frames[0].canvas_width, 320.0)

    def test_later_layouts_behave_like_resize(self) -> None:
        surface = _CaptureSurface()
        graph = BuyInLineGraph(surface)
        graph.on_layout(320, 120)
        graph.on_layout(640, 240)
        self.assertEqual(len(surface.frames), 2)
        self.assertEqual(graph.size, (640.0, 240.0))
        self.assertIs(graph.last_commands, surface.frames[-1])


if __name__ == "__main__":
    unittest.main()
