from __future__ import annotations

import argparse
from pathlib import Path

from PIL import Image

from buyin_graph import BuyInLineGraph, DataPoint, DrawCommands, ObservablePoints
from buyin_graph.export import write_svg
from buyin_graph.raster import rasterize


class FileSurface:
    """Writes every redraw to PNG and SVG files, overwriting the previous frame."""

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir
        self.draw_count = 0

    def draw(self, commands: DrawCommands) -> None:
        self.draw_count += 1
        Image.fromarray(rasterize(commands)).save(self.out_dir / "chart.png")
        write_svg(commands, self.out_dir / "chart.svg")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a running-profit chart to chart.png/chart.svg")
    parser.add_argument("amounts", nargs="*", type=float, default=[-50.0, 30.0, 80.0, -20.0, 45.0])
    parser.add_argument("--buyin", action="store_true", help="draw raw buy-ins instead of profit")
    parser.add_argument("--width", type=float, default=320.0)
    parser.add_argument("--height", type=float, default=120.0)
    parser.add_argument("--out-dir", type=Path, default=Path("."))
    args = parser.parse_args()

    surface = FileSurface(args.out_dir)
    graph = BuyInLineGraph(surface)
    graph.is_profit_mode = not args.buyin
    points = ObservablePoints()
    graph.points = points
    graph.on_layout(args.width, args.height)
    points.reset(DataPoint(amount=a) for a in args.amounts)
    print(f"wrote {args.out_dir / 'chart.png'} after {surface.draw_count} redraws")


if __name__ == "__main__":
    main()
