from __future__ import annotations

from pathlib import Path
import xml.etree.ElementTree as ET

from buyin_graph.commands import CubicSegment, DrawCommands, LineSegment, QuadraticSegment, Segment
from buyin_graph.raster.compose import PADDING_PX, frame_size
from buyin_graph.style.theme import DEFAULT_TOKENS, ChartThemeTokens

SVG_NS = "http://www.w3.org/2000/svg"


def to_svg_markup(commands: DrawCommands, theme: ChartThemeTokens | None = None) -> str:
    """Serialize a primitive set to standalone SVG using the raster frame layout."""
    theme = theme or DEFAULT_TOKENS
    width, height = frame_size(commands)
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(width),
            "height": str(height),
            "viewBox": f"0 0 {width} {height}",
        },
    )
    ET.SubElement(root, "rect", {"x": "0", "y": "0", "width": str(width), "height": str(height), "fill": theme.background_color})
    if commands.cleared:
        return ET.tostring(root, encoding="unicode")

    scale = ET.SubElement(root, "g", {"class": "scale"})
    for row in commands.scale_rows:
        _line(scale, row.tick, dx=0.0, dy=PADDING_PX)
    chart = ET.SubElement(root, "g", {"class": "chart", "transform": f"translate({_fmt(commands.gutter_width)},{PADDING_PX})"})
    for row in commands.scale_rows:
        _line(chart, row.grid)

    labels = ET.SubElement(root, "g", {"class": "labels", "fill": theme.label_color, "font-family": theme.font_family, "font-size": _fmt(theme.font_size_px)})
    for row in commands.scale_rows:
        text = ET.SubElement(
            labels,
            "text",
            {"x": _fmt(row.label_x), "y": _fmt(row.label_y + PADDING_PX), "dominant-baseline": "hanging"},
        )
        text.text = row.label

    ref = commands.reference_line
    if ref is not None:
        ET.SubElement(
            chart,
            "line",
            {
                "class": "reference",
                "x1": _fmt(ref.x1),
                "y1": _fmt(ref.y),
                "x2": _fmt(ref.x2),
                "y2": _fmt(ref.y),
                "stroke": ref.stroke,
                "stroke-width": _fmt(ref.stroke_width),
            },
        )

    for segment in commands.segments:
        if isinstance(segment, LineSegment):
            _line(chart, segment)
        else:
            ET.SubElement(
                chart,
                "path",
                {"d": _path_data(segment), "fill": "none", "stroke": segment.stroke, "stroke-width": _fmt(segment.stroke_width)},
            )

    for marker in commands.markers:
        ET.SubElement(
            chart,
            "circle",
            {
                "class": f"marker {marker.role}",
                "cx": _fmt(marker.x),
                "cy": _fmt(marker.y),
                "r": _fmt(marker.size / 2.0),
                "fill": marker.fill,
                "stroke": marker.stroke,
                "stroke-width": _fmt(marker.stroke_width),
            },
        )
    return ET.tostring(root, encoding="unicode")


def write_svg(commands: DrawCommands, path: Path, theme: ChartThemeTokens | None = None) -> Path:
    path.write_text(to_svg_markup(commands, theme), encoding="utf-8")
    return path


def _line(parent: ET.Element, seg: LineSegment, *, dx: float = 0.0, dy: float = 0.0) -> ET.Element:
    return ET.SubElement(
        parent,
        "line",
        {
            "x1": _fmt(seg.x1 + dx),
            "y1": _fmt(seg.y1 + dy),
            "x2": _fmt(seg.x2 + dx),
            "y2": _fmt(seg.y2 + dy),
            "stroke": seg.stroke,
            "stroke-width": _fmt(seg.stroke_width),
        },
    )


def _path_data(segment: Segment) -> str:
    if isinstance(segment, QuadraticSegment):
        (x0, y0), (cx, cy), (x1, y1) = segment.start, segment.control, segment.end
        return f"M {_fmt(x0)} {_fmt(y0)} Q {_fmt(cx)} {_fmt(cy)} {_fmt(x1)} {_fmt(y1)}"
    if isinstance(segment, CubicSegment):
        (x0, y0), (ax, ay), (bx, by), (x1, y1) = segment.start, segment.cp1, segment.cp2, segment.end
        return f"M {_fmt(x0)} {_fmt(y0)} C {_fmt(ax)} {_fmt(ay)} {_fmt(bx)} {_fmt(by)} {_fmt(x1)} {_fmt(y1)}"
    raise TypeError(f"unsupported segment type: {type(segment)!r}")


def _fmt(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("-0", "") else out
