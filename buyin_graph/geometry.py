from __future__ import annotations

import math
from typing import Sequence

from buyin_graph.series import PlottedPoint


Point = tuple[float, float]


def insert_zero_crossings(points: Sequence[PlottedPoint], zero_y: float) -> list[PlottedPoint]:
    """Insert a synthetic amount=0 knot between neighbours of strictly opposite sign.

    The knot sits where the segment reaches the zero row, so colour changes land
    on the crossing instead of being spread across a mixed-sign segment.
    """

    if len(points) < 2:
        return list(points)

    out: list[PlottedPoint] = [points[0]]
    for prev, cur in zip(points, points[1:]):
        if (prev.amount < 0.0 < cur.amount) or (prev.amount > 0.0 > cur.amount):
            out.append(_zero_crossing_knot(prev, cur, zero_y))
        out.append(cur)
    return out


def _zero_crossing_knot(a: PlottedPoint, b: PlottedPoint, zero_y: float) -> PlottedPoint:
    dy = b.y - a.y
    if dy == 0.0:
        t = 0.5
    else:
        t = (zero_y - a.y) / dy
        t = max(0.0, min(1.0, t))
    return PlottedPoint(
        x=a.x + (b.x - a.x) * t,
        y=a.y + dy * t,
        amount=0.0,
        synthetic=True,
    )


def catmull_rom_segments(knots: Sequence[Point]) -> list[tuple[Point, Point, Point, Point]]:
    """Convert a uniform Catmull-Rom spline into cubic Bezier segments.

    Returns ``(start, cp1, cp2, end)`` per consecutive knot pair. End knots are
    duplicated as their own missing neighbour.
    """

    n = len(knots)
    segments: list[tuple[Point, Point, Point, Point]] = []
    for i in range(n - 1):
        p0 = knots[i - 1] if i > 0 else knots[i]
        p1 = knots[i]
        p2 = knots[i + 1]
        p3 = knots[i + 2] if i + 2 < n else p2
        cp1 = (p1[0] + (p2[0] - p0[0]) / 6.0, p1[1] + (p2[1] - p0[1]) / 6.0)
        cp2 = (p2[0] - (p3[0] - p1[0]) / 6.0, p2[1] - (p3[1] - p1[1]) / 6.0)
        segments.append((p1, cp1, cp2, p2))
    return segments


def bowed_control_point(start: Point, end: Point, curvature: float) -> Point:
    """Quadratic control point offset perpendicular to the chord by ``length * curvature``."""
    mid_x = (start[0] + end[0]) / 2.0
    mid_y = (start[1] + end[1]) / 2.0
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return (mid_x, mid_y)
    offset = length * curvature
    nx = -dy / length
    ny = dx / length
    return (mid_x + nx * offset, mid_y + ny * offset)


def flatten_quadratic(p0: Point, p1: Point, p2: Point, steps: int = 24) -> list[Point]:
    out: list[Point] = []
    for i in range(steps + 1):
        t = i / steps
        u = 1.0 - t
        out.append(
            (
                u * u * p0[0] + 2.0 * u * t * p1[0] + t * t * p2[0],
                u * u * p0[1] + 2.0 * u * t * p1[1] + t * t * p2[1],
            )
        )
    return out


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point, steps: int = 24) -> list[Point]:
    out: list[Point] = []
    for i in range(steps + 1):
        t = i / steps
        u = 1.0 - t
        a = u * u * u
        b = 3.0 * u * u * t
        c = 3.0 * u * t * t
        d = t * t * t
        out.append(
            (
                a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
                a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1],
            )
        )
    return out
