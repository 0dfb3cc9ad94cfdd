from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from buyin_graph.raster.canvas import RGBA

LOGGER = logging.getLogger(__name__)


DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 10.0
MONO_FONT_FALLBACK_KEYS = ("comicmono", "menlo", "monaco", "couriernew", "courier", "dejavusansmono")
FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc"})
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    _blend_mask(dst, x, y, mask, color)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)

    patch[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=max(1, int(round(font_size_px))))
        except OSError as exc:
            LOGGER.debug("font %s unreadable (%s); using Pillow default", font_path, exc)
    else:
        LOGGER.debug("no installed font matches %r; using Pillow default", font_family)
    return ImageFont.load_default()


def _resolve_font_path(font_family: str, fonts: Iterable[Path] | None = None) -> Path | None:
    """First installed font whose file name contains the family, else a mono fallback."""
    names = [(path, _font_key(path.name)) for path in (_installed_fonts() if fonts is None else fonts)]
    for key in _family_keys(font_family):
        match = next((path for path, name in names if key in name), None)
        if match is not None:
            return match
    return None


def _family_keys(font_family: str) -> Iterator[str]:
    yield _font_key(font_family) or _font_key(DEFAULT_FONT_FAMILY)
    yield from MONO_FONT_FALLBACK_KEYS


def _font_key(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


@lru_cache(maxsize=1)
def _installed_fonts() -> tuple[Path, ...]:
    found: list[Path] = []
    for base in FONT_DIRS:
        if base.is_dir():
            found.extend(p for p in base.rglob("*") if p.suffix.lower() in FONT_SUFFIXES)
    return tuple(sorted(found))
