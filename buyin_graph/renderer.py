from __future__ import annotations

import logging
from typing import Any

import numpy as np

from buyin_graph.adapters.normalize import normalize_amounts
from buyin_graph.commands import (
    CubicSegment,
    DrawCommands,
    LineSegment,
    Marker,
    MarkerRole,
    QuadraticSegment,
    ReferenceLine,
    ScaleRow,
    Segment,
)
from buyin_graph.config import ChartConfig
from buyin_graph.errors import GraphDataError
from buyin_graph.geometry import bowed_control_point, catmull_rom_segments, insert_zero_crossings
from buyin_graph.scales import compute_chart_state, map_to_pixels, scale_rows
from buyin_graph.series import ChartState, PlottedPoint, mode_for

LOGGER = logging.getLogger(__name__)

ChartParts = tuple[list[Segment], list[Marker], list[PlottedPoint]]


class ChartRenderer:
    """Turns a chronological amount sequence into drawable primitives.

    Every call recomputes the full chart; nothing is cached between calls, so
    data changes, mode switches and resizes all go through :meth:`render`.
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        self.config = config or ChartConfig()

    def render(self, points: Any, is_profit_mode: bool, width: float, height: float) -> DrawCommands:
        canvas_w, canvas_h, used_fallback = self.config.resolve_canvas_size(width, height)
        if used_fallback:
            LOGGER.debug("chart surface %sx%s not measured; using %sx%s", width, height, canvas_w, canvas_h)

        try:
            amounts = normalize_amounts(points)
            if amounts.size == 0:
                LOGGER.debug("no chart data, clearing graph")
                return self._cleared(is_profit_mode, canvas_w, canvas_h)
            state = compute_chart_state(amounts, canvas_w, canvas_h)
        except GraphDataError as exc:
            LOGGER.warning("chart data rejected, clearing graph: %s", exc)
            return self._cleared(is_profit_mode, canvas_w, canvas_h)
        LOGGER.debug(
            "rendering %d points (%s) on %sx%s, range [%s, %s]",
            amounts.size,
            mode_for(is_profit_mode),
            canvas_w,
            canvas_h,
            state.min_amount,
            state.max_amount,
        )

        if amounts.size == 1:
            amount = float(amounts[0])
            if is_profit_mode:
                segments, markers, knots = self._single_profit(amount, state)
            else:
                segments, markers, knots = self._single_buyin(amount, state)
        else:
            plotted = self._project(amounts, state)
            if is_profit_mode:
                segments, markers, knots = self._multi_profit(plotted, state)
            else:
                segments, markers, knots = self._multi_buyin(plotted)

        return DrawCommands(
            cleared=False,
            mode=mode_for(is_profit_mode),
            canvas_width=canvas_w,
            canvas_height=canvas_h,
            gutter_width=self.config.theme.axis_gutter_width_px,
            segments=tuple(segments),
            markers=tuple(markers),
            reference_line=self._reference_line(state, is_profit_mode),
            scale_rows=tuple(self._scale_rows(state)),
            knots=tuple(knots),
        )

    def _cleared(self, is_profit_mode: bool, canvas_w: float, canvas_h: float) -> DrawCommands:
        return DrawCommands(
            cleared=True,
            mode=mode_for(is_profit_mode),
            canvas_width=canvas_w,
            canvas_height=canvas_h,
            gutter_width=self.config.theme.axis_gutter_width_px,
        )

    @staticmethod
    def _project(amounts: np.ndarray, state: ChartState) -> list[PlottedPoint]:
        px, py = map_to_pixels(amounts, state)
        return [
            PlottedPoint(x=float(x), y=float(y), amount=float(a))
            for x, y, a in zip(px.tolist(), py.tolist(), amounts.tolist(), strict=False)
        ]

    def _single_profit(self, amount: float, state: ChartState) -> ChartParts:
        cfg = self.config
        start = (0.0, state.project_y(0.0))
        end = (state.canvas_width, state.project_y(amount))
        color = self._sign_color(amount)
        curve = QuadraticSegment(
            start=start,
            control=bowed_control_point(start, end, cfg.curvature),
            end=end,
            stroke=color,
            stroke_width=cfg.stroke_width,
        )
        markers = [
            self._marker(start[0], start[1], cfg.theme.neutral_color, 0.0, role="origin"),
            self._marker(end[0], end[1], color, amount),
        ]
        knots = [PlottedPoint(x=end[0], y=end[1], amount=amount)]
        return [curve], markers, knots

    def _single_buyin(self, amount: float, state: ChartState) -> ChartParts:
        cfg = self.config
        y = state.project_y(amount)
        line = LineSegment(0.0, y, state.canvas_width, y, stroke=cfg.theme.buyin_color, stroke_width=cfg.stroke_width)
        center_x = state.canvas_width / 2.0
        marker = self._marker(center_x, y, cfg.theme.buyin_color, amount)
        return [line], [marker], [PlottedPoint(x=center_x, y=y, amount=amount)]

    def _multi_buyin(self, plotted: list[PlottedPoint]) -> ChartParts:
        cfg = self.config
        color = cfg.theme.buyin_color
        segments: list[Segment] = [
            LineSegment(a.x, a.y, b.x, b.y, stroke=color, stroke_width=cfg.stroke_width)
            for a, b in zip(plotted, plotted[1:])
        ]
        markers = [self._marker(p.x, p.y, color, p.amount) for p in plotted]
        return segments, markers, plotted

    def _multi_profit(self, plotted: list[PlottedPoint], state: ChartState) -> ChartParts:
        cfg = self.config
        knots = insert_zero_crossings(plotted, state.project_y(0.0))
        beziers = catmull_rom_segments([(k.x, k.y) for k in knots])
        segments: list[Segment] = []
        for (start, cp1, cp2, end), a, b in zip(beziers, knots, knots[1:], strict=False):
            segments.append(
                CubicSegment(
                    start=start,
                    cp1=cp1,
                    cp2=cp2,
                    end=end,
                    stroke=self._sign_color((a.amount + b.amount) / 2.0),
                    stroke_width=cfg.stroke_width,
                )
            )
        markers = [self._marker(p.x, p.y, self._sign_color(p.amount), p.amount) for p in plotted]
        return segments, markers, knots

    def _reference_line(self, state: ChartState, is_profit_mode: bool) -> ReferenceLine | None:
        if not is_profit_mode or not state.contains_zero():
            return None
        return ReferenceLine(
            y=state.project_y(0.0),
            x1=0.0,
            x2=state.canvas_width,
            stroke=self.config.theme.reference_line_color,
        )

    def _scale_rows(self, state: ChartState) -> list[ScaleRow]:
        cfg = self.config
        gutter = cfg.theme.axis_gutter_width_px
        tick_x1 = max(0.0, gutter - cfg.tick_length)
        rows: list[ScaleRow] = []
        for spec in scale_rows(state, cfg.scale_fractions):
            rows.append(
                ScaleRow(
                    fraction=spec.fraction,
                    amount=spec.amount,
                    label=spec.label,
                    label_x=0.0,
                    label_y=spec.y - cfg.label_offset,
                    tick=LineSegment(tick_x1, spec.y, gutter, spec.y, stroke=cfg.theme.tick_color, stroke_width=1.0),
                    grid=LineSegment(0.0, spec.y, state.canvas_width, spec.y, stroke=cfg.theme.grid_color, stroke_width=1.0),
                )
            )
        return rows

    def _sign_color(self, amount: float) -> str:
        return self.config.theme.gain_color if amount >= 0.0 else self.config.theme.loss_color

    def _marker(self, x: float, y: float, fill: str, amount: float, *, role: MarkerRole = "data") -> Marker:
        cfg = self.config
        return Marker(
            x=x,
            y=y,
            fill=fill,
            stroke=cfg.theme.marker_stroke_color,
            size=cfg.marker_size,
            stroke_width=cfg.marker_stroke_width,
            amount=amount,
            role=role,
        )
