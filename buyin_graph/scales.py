from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Sequence

import numpy as np

from buyin_graph.errors import GraphDataError
from buyin_graph.series import ChartState


@dataclass(frozen=True)
class ScaleRowSpec:
    fraction: float
    y: float
    amount: float
    label: str


def compute_chart_state(amounts: np.ndarray, canvas_width: float, canvas_height: float) -> ChartState:
    if amounts.size == 0:
        raise ValueError("amounts must not be empty")
    min_amount = float(np.min(amounts))
    max_amount = float(np.max(amounts))

    # Widen only the opposite-sign bound so zero stays on the chart.
    if min_amount > 0.0:
        min_amount = 0.0
    if max_amount < 0.0:
        max_amount = 0.0

    amount_range = max_amount - min_amount
    if amount_range == 0.0:
        amount_range = 1.0
    if not np.isfinite(amount_range):
        raise GraphDataError(f"amount range overflows: [{min_amount}, {max_amount}]")

    return ChartState(
        min_amount=min_amount,
        max_amount=max_amount,
        amount_range=amount_range,
        canvas_width=float(canvas_width),
        canvas_height=float(canvas_height),
    )


def map_to_pixels(amounts: np.ndarray, state: ChartState) -> tuple[np.ndarray, np.ndarray]:
    """Project amounts onto evenly spaced columns, clamped into the canvas."""
    n = amounts.size
    if n > 1:
        px = np.arange(n, dtype=np.float64) / float(n - 1) * state.canvas_width
    else:
        px = np.zeros(n, dtype=np.float64)
    py = state.canvas_height - ((amounts - state.min_amount) / state.amount_range) * state.canvas_height
    np.clip(px, 0.0, state.canvas_width, out=px)
    py = np.clip(py, 0.0, state.canvas_height)
    return px, py


def scale_rows(state: ChartState, fractions: Sequence[float]) -> list[ScaleRowSpec]:
    rows: list[ScaleRowSpec] = []
    for fraction in fractions:
        y = state.canvas_height - fraction * state.canvas_height
        amount = state.min_amount + fraction * state.amount_range
        rows.append(ScaleRowSpec(fraction=float(fraction), y=y, amount=amount, label=format_currency(amount)))
    return rows


def format_currency(value: float) -> str:
    """Format as ``$<integer>``, rounding half away from zero (``$-120``)."""
    if not np.isfinite(value):
        return f"${value}"
    try:
        q = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        q = Decimal(int(round(value)))
    out = format(q, "f")
    if out == "-0":
        out = "0"
    return f"${out}"
