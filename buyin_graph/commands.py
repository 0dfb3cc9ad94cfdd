from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from buyin_graph.series import ChartMode, PlottedPoint


MarkerRole = Literal["data", "origin"]


@dataclass(frozen=True)
class Marker:
    """Square-bounded point marker centred on ``(x, y)``."""

    x: float
    y: float
    fill: str
    stroke: str
    size: float = 6.0
    stroke_width: float = 1.0
    amount: float = 0.0
    role: MarkerRole = "data"


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 2.0


@dataclass(frozen=True)
class QuadraticSegment:
    start: tuple[float, float]
    control: tuple[float, float]
    end: tuple[float, float]
    stroke: str
    stroke_width: float = 2.0


@dataclass(frozen=True)
class CubicSegment:
    start: tuple[float, float]
    cp1: tuple[float, float]
    cp2: tuple[float, float]
    end: tuple[float, float]
    stroke: str
    stroke_width: float = 2.0


Segment = Union[LineSegment, QuadraticSegment, CubicSegment]


@dataclass(frozen=True)
class ReferenceLine:
    y: float
    x1: float
    x2: float
    stroke: str
    stroke_width: float = 1.0


@dataclass(frozen=True)
class ScaleRow:
    """One scale row: gutter tick (gutter coordinates), grid line and label."""

    fraction: float
    amount: float
    label: str
    label_x: float
    label_y: float
    tick: LineSegment
    grid: LineSegment


@dataclass(frozen=True)
class DrawCommands:
    """Complete primitive set for one redraw; replaces whatever was drawn before."""

    cleared: bool
    mode: ChartMode
    canvas_width: float
    canvas_height: float
    gutter_width: float
    segments: tuple[Segment, ...] = ()
    markers: tuple[Marker, ...] = ()
    reference_line: ReferenceLine | None = None
    scale_rows: tuple[ScaleRow, ...] = ()
    knots: tuple[PlottedPoint, ...] = ()

    @property
    def data_markers(self) -> tuple[Marker, ...]:
        return tuple(m for m in self.markers if m.role == "data")

    @property
    def synthetic_knots(self) -> tuple[PlottedPoint, ...]:
        return tuple(k for k in self.knots if k.synthetic)
