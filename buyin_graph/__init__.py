from buyin_graph.binding import BuyInLineGraph, DrawSurface, ObservablePoints, PointsChange, Subscription
from buyin_graph.commands import CubicSegment, DrawCommands, LineSegment, Marker, QuadraticSegment, ReferenceLine, ScaleRow
from buyin_graph.config import ChartConfig
from buyin_graph.errors import GraphDataError
from buyin_graph.renderer import ChartRenderer
from buyin_graph.series import ChartState, DataPoint, PlottedPoint
from buyin_graph.style.theme import ChartThemeTokens, validate_theme_tokens

__all__ = [
    "BuyInLineGraph",
    "ChartConfig",
    "ChartRenderer",
    "ChartState",
    "ChartThemeTokens",
    "CubicSegment",
    "DataPoint",
    "DrawCommands",
    "DrawSurface",
    "GraphDataError",
    "LineSegment",
    "Marker",
    "ObservablePoints",
    "PlottedPoint",
    "PointsChange",
    "QuadraticSegment",
    "ReferenceLine",
    "ScaleRow",
    "Subscription",
    "validate_theme_tokens",
]
