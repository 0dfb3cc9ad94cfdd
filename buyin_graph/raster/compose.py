from __future__ import annotations

import math

import numpy as np

from buyin_graph.commands import CubicSegment, DrawCommands, LineSegment, QuadraticSegment, Segment
from buyin_graph.geometry import flatten_cubic, flatten_quadratic
from buyin_graph.raster.canvas import draw_hline, new_canvas
from buyin_graph.raster.draw_lines import draw_polyline
from buyin_graph.raster.draw_markers import draw_marker
from buyin_graph.raster.draw_text import draw_text
from buyin_graph.style.theme import DEFAULT_TOKENS, ChartThemeTokens, hex_to_rgba


PADDING_PX = 8
CURVE_STEPS = 24


def frame_size(commands: DrawCommands) -> tuple[int, int]:
    width = int(math.ceil(commands.gutter_width + commands.canvas_width)) + PADDING_PX + 1
    height = int(math.ceil(commands.canvas_height)) + 2 * PADDING_PX + 1
    return width, height


def rasterize(commands: DrawCommands, theme: ChartThemeTokens | None = None) -> np.ndarray:
    """Compose gutter and chart area into an RGBA frame of shape (H, W, 4).

    Chart coordinates are offset by the gutter width horizontally and by
    ``PADDING_PX`` vertically so labels above the top row stay visible.
    """

    theme = theme or DEFAULT_TOKENS
    width, height = frame_size(commands)
    canvas = new_canvas(width, height, color=hex_to_rgba(theme.background_color))
    if commands.cleared:
        return canvas

    ox = commands.gutter_width
    oy = float(PADDING_PX)

    for row in commands.scale_rows:
        grid = row.grid
        draw_hline(canvas, int(round(grid.x1 + ox)), int(round(grid.x2 + ox)), int(round(grid.y1 + oy)), hex_to_rgba(grid.stroke))
        tick = row.tick
        draw_hline(canvas, int(round(tick.x1)), int(round(tick.x2)), int(round(tick.y1 + oy)), hex_to_rgba(tick.stroke))
        draw_text(
            canvas,
            int(round(row.label_x)),
            int(round(row.label_y + oy)),
            row.label,
            hex_to_rgba(theme.label_color),
            font_family=theme.font_family,
            font_size_px=theme.font_size_px,
        )

    ref = commands.reference_line
    if ref is not None:
        draw_hline(canvas, int(round(ref.x1 + ox)), int(round(ref.x2 + ox)), int(round(ref.y + oy)), hex_to_rgba(ref.stroke))

    for segment in commands.segments:
        pts = [(x + ox, y + oy) for x, y in _segment_points(segment)]
        draw_polyline(canvas, pts, hex_to_rgba(segment.stroke), width=max(1, int(round(segment.stroke_width))))

    for marker in commands.markers:
        draw_marker(
            canvas,
            marker.x + ox,
            marker.y + oy,
            fill=hex_to_rgba(marker.fill),
            stroke=hex_to_rgba(marker.stroke),
            size=marker.size,
            stroke_width=marker.stroke_width,
        )
    return canvas


def _segment_points(segment: Segment) -> list[tuple[float, float]]:
    if isinstance(segment, LineSegment):
        return [(segment.x1, segment.y1), (segment.x2, segment.y2)]
    if isinstance(segment, QuadraticSegment):
        return flatten_quadratic(segment.start, segment.control, segment.end, steps=CURVE_STEPS)
    if isinstance(segment, CubicSegment):
        return flatten_cubic(segment.start, segment.cp1, segment.cp2, segment.end, steps=CURVE_STEPS)
    raise TypeError(f"unsupported segment type: {type(segment)!r}")
