from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS = (
    "gain_color",
    "loss_color",
    "neutral_color",
    "buyin_color",
    "marker_stroke_color",
    "reference_line_color",
    "grid_color",
    "tick_color",
    "label_color",
    "background_color",
)


@dataclass(frozen=True)
class ChartThemeTokens:
    """Shared style tokens resolved by the host and injected into the renderer."""

    gain_color: str = "#4CAF50"
    loss_color: str = "#F44336"
    neutral_color: str = "#FFFFFF"
    buyin_color: str = "#4FC3F7"
    marker_stroke_color: str = "#FFFFFF"
    reference_line_color: str = "#9E9E9E"
    grid_color: str = "#FFFFFF22"
    tick_color: str = "#B0BEC5"
    label_color: str = "#B0BEC5"
    background_color: str = "#1E1E1E"
    axis_gutter_width_px: float = 40.0
    font_family: str = "Comic Mono"
    font_size_px: float = 10.0


DEFAULT_TOKENS = ChartThemeTokens()


def validate_theme_tokens(overrides: Mapping[str, Any] | None = None) -> ChartThemeTokens:
    """Validate and merge token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_TOKENS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    if not isinstance(raw["font_size_px"], (int, float)) or float(raw["font_size_px"]) <= 0:
        raise ValueError("Token `font_size_px` must be a positive number")

    if not isinstance(raw["axis_gutter_width_px"], (int, float)) or float(raw["axis_gutter_width_px"]) < 0:
        raise ValueError("Token `axis_gutter_width_px` must be a non-negative number")

    colors = {key: str(raw[key]) for key in _COLOR_TOKENS}
    return ChartThemeTokens(
        **colors,
        axis_gutter_width_px=float(raw["axis_gutter_width_px"]),
        font_family=str(raw["font_family"]),
        font_size_px=float(raw["font_size_px"]),
    )


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"invalid hex color: {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)
