from __future__ import annotations

import numpy as np

from buyin_graph.raster.canvas import RGBA, fill_mask


def draw_marker(
    dst: np.ndarray,
    x: float,
    y: float,
    *,
    fill: RGBA,
    stroke: RGBA,
    size: float = 6.0,
    stroke_width: float = 1.0,
) -> None:
    """Draw a filled, outlined ellipse marker of ``size`` pixels centred on (x, y)."""
    extent = max(1, int(round(size)))
    left = int(round(x - size / 2.0))
    top = int(round(y - size / 2.0))
    outer = _disc(extent, radius=extent / 2.0)
    inner = _disc(extent, radius=max(0.0, extent / 2.0 - stroke_width))
    fill_mask(dst, left, top, inner, fill)
    if stroke_width > 0:
        fill_mask(dst, left, top, outer & ~inner, stroke)


def _disc(extent: int, *, radius: float) -> np.ndarray:
    centre = (extent - 1) / 2.0
    yy, xx = np.mgrid[0:extent, 0:extent]
    return ((xx - centre) ** 2 + (yy - centre) ** 2) <= (radius**2 + 0.25)
