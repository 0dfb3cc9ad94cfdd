from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

import numpy as np
import torch

from buyin_graph.errors import GraphDataError
from buyin_graph.series import DataPoint


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_amounts(points: Any) -> np.ndarray:
    """Coerce host data into a 1-D float64 array of finite amounts.

    Accepts DataPoint records, plain numbers, Decimals, mappings with an
    ``amount`` key, objects exposing ``amount``, numpy arrays, torch tensors
    and pandas Series. ``None`` yields an empty array.
    """

    if points is None:
        return np.empty(0, dtype=np.float64)

    if isinstance(points, torch.Tensor):
        tensor = points.detach()
        if tensor.ndim != 1:
            raise GraphDataError("amounts must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return _require_finite(tensor.to(torch.float64).numpy())

    if pd is not None and isinstance(points, pd.Series):
        return _require_finite(_coerce_ndarray(points.to_numpy()))

    if isinstance(points, np.ndarray):
        if points.ndim != 1:
            raise GraphDataError("amounts must be 1-D")
        return _require_finite(_coerce_ndarray(points))

    if isinstance(points, Sequence) and not isinstance(points, (str, bytes, bytearray)):
        out = np.empty(len(points), dtype=np.float64)
        for i, raw in enumerate(points):
            out[i] = _coerce_amount(raw, index=i)
        return _require_finite(out)

    raise GraphDataError(f"unsupported points input type: {type(points)!r}")


def _coerce_amount(raw: Any, *, index: int) -> float:
    if isinstance(raw, DataPoint):
        raw = raw.amount
    elif isinstance(raw, Mapping):
        if "amount" not in raw:
            raise GraphDataError(f"point at index {index} has no amount")
        raw = raw["amount"]
    elif hasattr(raw, "amount"):
        raw = raw.amount

    if raw is None or isinstance(raw, (bool, str, bytes)):
        raise GraphDataError(f"point at index {index} has non-numeric amount: {raw!r}")
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise GraphDataError(f"point at index {index} has non-numeric amount: {raw!r}") from exc


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)
    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        out[i] = _coerce_amount(raw, index=i)
    return out


def _require_finite(arr: np.ndarray) -> np.ndarray:
    if arr.size and not np.all(np.isfinite(arr)):
        bad = int(np.flatnonzero(~np.isfinite(arr))[0])
        raise GraphDataError(f"point at index {bad} is not finite")
    return arr
