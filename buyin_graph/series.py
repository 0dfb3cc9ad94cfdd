from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ChartMode = Literal["profit", "buyin"]


@dataclass(frozen=True)
class DataPoint:
    amount: float


@dataclass(frozen=True)
class PlottedPoint:
    x: float
    y: float
    amount: float
    synthetic: bool = False


@dataclass(frozen=True)
class ChartState:
    """Per-render projection state; rebuilt on every call, never cached."""

    min_amount: float
    max_amount: float
    amount_range: float
    canvas_width: float
    canvas_height: float

    def project_y(self, amount: float) -> float:
        y = self.canvas_height - ((amount - self.min_amount) / self.amount_range) * self.canvas_height
        return max(0.0, min(self.canvas_height, y))

    def contains_zero(self) -> bool:
        return self.min_amount <= 0.0 <= self.max_amount


def mode_for(is_profit_mode: bool) -> ChartMode:
    return "profit" if is_profit_mode else "buyin"
