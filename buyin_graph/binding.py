from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass
import logging
from typing import Any, Callable, Literal, Protocol, overload

from buyin_graph.commands import DrawCommands
from buyin_graph.config import ChartConfig
from buyin_graph.renderer import ChartRenderer
from buyin_graph.series import DataPoint

LOGGER = logging.getLogger(__name__)

ChangeAction = Literal["add", "remove", "replace", "reset"]
Scheduler = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class PointsChange:
    action: ChangeAction
    index: int | None = None
    items: tuple[DataPoint, ...] = ()


ChangeListener = Callable[[PointsChange], None]


class DrawSurface(Protocol):
    """Host surface that displays a freshly computed primitive set."""

    def draw(self, commands: DrawCommands) -> None:
        ...


class Subscription:
    def __init__(self, owner: "ObservablePoints", listener: ChangeListener) -> None:
        self._owner: ObservablePoints | None = owner
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._owner is not None

    def unsubscribe(self) -> None:
        if self._owner is None:
            return
        self._owner._remove_listener(self._listener)
        self._owner = None


class ObservablePoints(MutableSequence[DataPoint]):
    """Ordered point list that notifies subscribers on add, remove, replace and reset."""

    def __init__(self, points: Iterable[DataPoint] = ()) -> None:
        self._items: list[DataPoint] = list(points)
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: PointsChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    @overload
    def __getitem__(self, index: int) -> DataPoint: ...

    @overload
    def __getitem__(self, index: slice) -> list[DataPoint]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._items[index] = list(value)
            self._notify(PointsChange(action="reset"))
            return
        self._items[index] = value
        self._notify(PointsChange(action="replace", index=index, items=(value,)))

    def __delitem__(self, index) -> None:
        if isinstance(index, slice):
            removed = tuple(self._items[index])
            del self._items[index]
            self._notify(PointsChange(action="remove", items=removed))
            return
        removed_item = self._items[index]
        del self._items[index]
        self._notify(PointsChange(action="remove", index=index, items=(removed_item,)))

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: DataPoint) -> None:
        self._items.insert(index, value)
        self._notify(PointsChange(action="add", index=index, items=(value,)))

    def clear(self) -> None:
        self._items.clear()
        self._notify(PointsChange(action="reset"))

    def reset(self, points: Iterable[DataPoint]) -> None:
        self._items = list(points)
        self._notify(PointsChange(action="reset"))

    def __repr__(self) -> str:
        return f"ObservablePoints({self._items!r})"


def _run_now(callback: Callable[[], None]) -> None:
    callback()


class BuyInLineGraph:
    """Wires data, mode and surface-size changes to a full chart redraw."""

    def __init__(
        self,
        surface: DrawSurface,
        *,
        config: ChartConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._surface = surface
        self._renderer = ChartRenderer(config)
        self._scheduler = scheduler or _run_now
        self._points: Any = None
        self._subscription: Subscription | None = None
        self._is_profit_mode = False
        self._width = 0.0
        self._height = 0.0
        self._loaded = False
        self.last_commands: DrawCommands | None = None

    @property
    def points(self) -> Any:
        return self._points

    @points.setter
    def points(self, value: Any) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._points = value
        if isinstance(value, ObservablePoints):
            self._subscription = value.subscribe(self._on_points_changed)
        self.update_graph()

    @property
    def is_profit_mode(self) -> bool:
        return self._is_profit_mode

    @is_profit_mode.setter
    def is_profit_mode(self, value: bool) -> None:
        value = bool(value)
        if value == self._is_profit_mode:
            return
        self._is_profit_mode = value
        self.update_graph()

    @property
    def size(self) -> tuple[float, float]:
        return (self._width, self._height)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def on_layout(self, width: float, height: float) -> None:
        """Post-layout hook; the first measured size schedules the initial render."""
        if self._loaded:
            self.resize(width, height)
            return
        if width <= 0 or height <= 0:
            LOGGER.debug("layout reported unmeasured surface %sx%s; deferring first render", width, height)
            return
        self._width = float(width)
        self._height = float(height)
        self._loaded = True
        self._scheduler(self.update_graph)

    def resize(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)
        self.update_graph()

    def update_graph(self) -> DrawCommands:
        commands = self._renderer.render(self._points, self._is_profit_mode, self._width, self._height)
        self.last_commands = commands
        self._surface.draw(commands)
        return commands

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_points_changed(self, change: PointsChange) -> None:
        LOGGER.debug("chart data changed (%s); redrawing", change.action)
        self.update_graph()
