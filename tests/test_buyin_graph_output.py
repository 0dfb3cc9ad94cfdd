from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import unittest
import xml.etree.ElementTree as ET

import numpy as np
import torch

from buyin_graph import ChartRenderer, DataPoint, GraphDataError
from buyin_graph.adapters.normalize import normalize_amounts
from buyin_graph.compile import compile_commands_tensor, compile_frame_tensor
from buyin_graph.export import to_svg_markup
from buyin_graph.raster import frame_size, rasterize
from buyin_graph.raster.compose import PADDING_PX
from buyin_graph.raster.draw_text import _resolve_font_path, draw_text
from buyin_graph.style.theme import DEFAULT_TOKENS, hex_to_rgba

SVG = "{http://www.w3.org/2000/svg}"


class _Record:
    def __init__(self, amount: float) -> None:
        self.amount = amount


class NormalizeTests(unittest.TestCase):
    def test_mixed_record_types(self) -> None:
        data = [DataPoint(1.5), Decimal("2.25"), {"amount": 3}, _Record(-4.0), 5]
        self.assertEqual(normalize_amounts(data).tolist(), [1.5, 2.25, 3.0, -4.0, 5.0])

    def test_numpy_and_torch_inputs(self) -> None:
        arr = normalize_amounts(np.asarray([1, 2, 3], dtype=np.int64))
        self.assertEqual(arr.dtype, np.float64)
        tensor = normalize_amounts(torch.tensor([1, -2], dtype=torch.int32))
        self.assertEqual(tensor.tolist(), [1.0, -2.0])

    def test_pandas_series(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")
        self.assertEqual(normalize_amounts(pd.Series([1, 2])).tolist(), [1.0, 2.0])

    def test_rejects_bad_input(self) -> None:
        with self.assertRaisesRegex(GraphDataError, "no amount"):
            normalize_amounts([{"value": 1}])
        with self.assertRaisesRegex(GraphDataError, "not finite"):
            normalize_amounts([1.0, float("inf")])
        with self.assertRaisesRegex(GraphDataError, "1-D"):
            normalize_amounts(np.zeros((2, 2)))
        with self.assertRaises(GraphDataError):
            normalize_amounts("12")


class RasterTests(unittest.TestCase):
    def test_frame_layout_includes_gutter_and_padding(self) -> None:
        commands = ChartRenderer().render([1.0, 2.0], True, 100, 50)
        frame = rasterize(commands)
        self.assertEqual(frame.shape, (50 + 2 * PADDING_PX + 1, 40 + 100 + PADDING_PX + 1, 4))
        self.assertEqual(frame.dtype, np.uint8)
        self.assertEqual(frame_size(commands), (frame.shape[1], frame.shape[0]))

    def test_cleared_frame_is_background_only(self) -> None:
        frame = rasterize(ChartRenderer().render([], True, 100, 50))
        self.assertTrue(np.all(frame == np.asarray(hex_to_rgba(DEFAULT_TOKENS.background_color), dtype=np.uint8)))

    def test_buyin_line_is_painted(self) -> None:
        commands = ChartRenderer().render([20.0], False, 100, 50)
        frame = rasterize(commands)
        x = int(DEFAULT_TOKENS.axis_gutter_width_px) + 25
        self.assertEqual(tuple(frame[PADDING_PX, x].tolist()), hex_to_rgba(DEFAULT_TOKENS.buyin_color))

    def test_markers_and_labels_change_pixels(self) -> None:
        commands = ChartRenderer().render([-20.0, 40.0, 10.0], True, 120, 60)
        frame = rasterize(commands)
        background = np.asarray(hex_to_rgba(DEFAULT_TOKENS.background_color), dtype=np.uint8)
        gutter = frame[:, : int(DEFAULT_TOKENS.axis_gutter_width_px) - 6]
        self.assertTrue(np.any(np.any(gutter != background, axis=-1)))
        marker = commands.data_markers[1]
        px = frame[int(round(marker.y)) + PADDING_PX, int(round(marker.x + commands.gutter_width)) - 1]
        self.assertFalse(np.array_equal(px, background))

    def test_overflowing_chart_rasterizes_as_background(self) -> None:
        commands = ChartRenderer().render([DataPoint(-1e308), DataPoint(1e308)], True, 200, 100)
        frame = rasterize(commands)
        self.assertTrue(np.all(frame == np.asarray(hex_to_rgba(DEFAULT_TOKENS.background_color), dtype=np.uint8)))

    def test_rasterize_is_deterministic(self) -> None:
        commands = ChartRenderer().render([-5.0, 15.0, 2.0], True, 80, 40)
        self.assertTrue(np.array_equal(rasterize(commands), rasterize(commands)))


class FontResolutionTests(unittest.TestCase):
    FONTS = (Path("/fonts/Arial.ttf"), Path("/fonts/DejaVu Sans Mono Bold.ttf"), Path("/fonts/Menlo.ttc"))

    def test_family_match_ignores_case_and_spacing(self) -> None:
        self.assertEqual(_resolve_font_path("dejavusans mono", self.FONTS), self.FONTS[1])
        self.assertEqual(_resolve_font_path("ARIAL", self.FONTS), self.FONTS[0])

    def test_unknown_family_falls_back_to_mono(self) -> None:
        self.assertEqual(_resolve_font_path("No Such Font", self.FONTS), self.FONTS[2])
        self.assertIsNone(_resolve_font_path("No Such Font", self.FONTS[:1]))

    def test_unknown_family_still_paints_label(self) -> None:
        frame = np.zeros((20, 60, 4), dtype=np.uint8)
        draw_text(frame, 2, 2, "$-40", (255, 255, 255, 255), font_family="No Such Font Family")
        self.assertTrue(np.any(frame[:, :, 3] > 0))


class TensorCompileTests(unittest.TestCase):
    def test_compile_commands_tensor(self) -> None:
        commands = ChartRenderer().render([1.0, 3.0], False, 60, 30)
        tensor = compile_commands_tensor(commands)
        self.assertEqual(tensor.dtype, torch.uint8)
        self.assertEqual(tuple(tensor.shape), (30 + 2 * PADDING_PX + 1, 40 + 60 + PADDING_PX + 1, 4))

    def test_rejects_invalid_frames(self) -> None:
        with self.assertRaisesRegex(ValueError, "uint8"):
            compile_frame_tensor(np.zeros((2, 2, 4), dtype=np.float32))
        with self.assertRaisesRegex(ValueError, "shape"):
            compile_frame_tensor(np.zeros((2, 2, 3), dtype=np.uint8))


class SvgExportTests(unittest.TestCase):
    def test_profit_chart_markup(self) -> None:
        commands = ChartRenderer().render([-50.0, 30.0], True, 160, 80)
        root = ET.fromstring(to_svg_markup(commands))
        self.assertEqual(len(root.findall(f".//{SVG}circle")), 2)
        paths = root.findall(f".//{SVG}path")
        self.assertEqual(len(paths), 2)
        self.assertTrue(all(" C " in p.attrib["d"] for p in paths))
        self.assertEqual(
            [t.text for t in root.findall(f".//{SVG}text")],
            ["$-50", "$-30", "$-10", "$10", "$30"],
        )
        refs = [e for e in root.iter(f"{SVG}line") if e.attrib.get("class") == "reference"]
        self.assertEqual(len(refs), 1)
        self.assertEqual(refs[0].attrib["y1"], "30")

    def test_single_point_profit_uses_quadratic_path(self) -> None:
        root = ET.fromstring(to_svg_markup(ChartRenderer().render([50.0], True, 200, 100)))
        (path,) = root.findall(f".//{SVG}path")
        self.assertEqual(path.attrib["d"], "M 0 100 Q 115 80 200 0")
        roles = [c.attrib["class"] for c in root.findall(f".//{SVG}circle")]
        self.assertEqual(roles, ["marker origin", "marker data"])

    def test_cleared_chart_has_only_background(self) -> None:
        root = ET.fromstring(to_svg_markup(ChartRenderer().render([], False, 100, 50)))
        self.assertEqual([child.tag for child in root], [f"{SVG}rect"])


if __name__ == "__main__":
    unittest.main()
