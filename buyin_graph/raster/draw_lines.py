from __future__ import annotations

from typing import Sequence

import numpy as np

from buyin_graph.raster.canvas import RGBA, draw_pixel


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, width: int = 1) -> None:
    if len(points) < 2:
        return
    pts = [(int(round(x)), int(round(y))) for x, y in points]
    for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
        _draw_line_segment(dst, x0, y0, x1, y1, color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    # Even widths grow toward +x/+y so a 2px stroke stays 2px wide.
    lo = -((width - 1) // 2)
    hi = width // 2
    for yy in range(y + lo, y + hi + 1):
        for xx in range(x + lo, x + hi + 1):
            draw_pixel(dst, xx, yy, color)
