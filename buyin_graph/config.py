from __future__ import annotations

from dataclasses import dataclass, field
import math

from buyin_graph.style.theme import DEFAULT_TOKENS, ChartThemeTokens


DEFAULT_FALLBACK_WIDTH = 300.0
DEFAULT_FALLBACK_HEIGHT = 90.0
DEFAULT_CURVATURE = 0.15
DEFAULT_SCALE_FRACTIONS = (0.0, 0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class ChartConfig:
    surface_margin: float = 0.0
    fallback_width: float = DEFAULT_FALLBACK_WIDTH
    fallback_height: float = DEFAULT_FALLBACK_HEIGHT
    curvature: float = DEFAULT_CURVATURE
    marker_size: float = 6.0
    marker_stroke_width: float = 1.0
    stroke_width: float = 2.0
    tick_length: float = 5.0
    label_offset: float = 8.0
    scale_fractions: tuple[float, ...] = DEFAULT_SCALE_FRACTIONS
    theme: ChartThemeTokens = field(default_factory=lambda: DEFAULT_TOKENS)

    def __post_init__(self) -> None:
        if self.surface_margin < 0:
            raise ValueError("surface_margin must be >= 0")
        if self.fallback_width <= 0 or self.fallback_height <= 0:
            raise ValueError("fallback_width/fallback_height must be > 0")
        if self.marker_size <= 0:
            raise ValueError("marker_size must be > 0")
        if self.stroke_width <= 0:
            raise ValueError("stroke_width must be > 0")
        if self.tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        if not self.scale_fractions:
            raise ValueError("scale_fractions must not be empty")
        if any(f < 0.0 or f > 1.0 for f in self.scale_fractions):
            raise ValueError("scale_fractions must lie in [0, 1]")

    def resolve_canvas_size(self, width: float, height: float) -> tuple[float, float, bool]:
        """Return (canvas_width, canvas_height, used_fallback) for a measured surface."""
        canvas_w = float(width) - self.surface_margin
        canvas_h = float(height) - self.surface_margin
        if canvas_w > 0 and canvas_h > 0 and math.isfinite(canvas_w) and math.isfinite(canvas_h):
            return canvas_w, canvas_h, False
        # Layout passes before measurement report 0x0; keep the surface width if known.
        if not (canvas_w > 0 and math.isfinite(canvas_w)):
            canvas_w = self.fallback_width
        return canvas_w, self.fallback_height, True
