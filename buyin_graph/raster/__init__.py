from .canvas import draw_hline, new_canvas
from .compose import frame_size, rasterize
from .draw_lines import draw_polyline
from .draw_markers import draw_marker
from .draw_text import draw_text

__all__ = [
    "draw_hline",
    "draw_marker",
    "draw_polyline",
    "draw_text",
    "frame_size",
    "new_canvas",
    "rasterize",
]
