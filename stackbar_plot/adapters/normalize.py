from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import logging
from typing import Any

import numpy as np
import pandas as pd

from stackbar_plot.errors import ChartDataError


LOGGER = logging.getLogger(__name__)


def resolve_column(data: Any, column_id: str) -> Sequence[Any] | None:
    """Return the raw values of `column_id` from a mapping or DataFrame, or None."""

    if isinstance(data, pd.DataFrame):
        if column_id not in data.columns:
            return None
        return data[column_id].tolist()
    if isinstance(data, Mapping):
        column = data.get(column_id)
        if column is None:
            return None
        return _as_sequence(column, label=column_id)
    raise ChartDataError(f"unsupported data source type: {type(data)!r}")


def coerce_numeric_column(values: Sequence[Any] | None, *, length: int, label: str = "value") -> np.ndarray:
    """Coerce a host column to float64 of exactly `length` entries.

    Absent entries (None, NaN, unparseable, or past the end of a short column)
    become 0.
    """

    out = np.zeros(length, dtype=np.float64)
    if values is None or length == 0:
        return out
    arr = np.asarray(values[:length] if isinstance(values, Sequence) else list(values)[:length], dtype=object)
    coerced = _coerce_ndarray(arr, label=label)
    n = min(length, coerced.size)
    out[:n] = coerced[:n]
    out[~np.isfinite(out)] = 0.0
    return out


def first_finite_value(values: Sequence[Any] | None) -> float:
    if values is None or len(values) == 0:
        return float("nan")
    coerced = _coerce_ndarray(np.asarray([values[0]], dtype=object), label="target")
    value = float(coerced[0])
    return value if np.isfinite(value) else float("nan")


def _as_sequence(column: Any, *, label: str) -> Sequence[Any]:
    if isinstance(column, pd.Series):
        return column.tolist()
    if isinstance(column, np.ndarray):
        if column.ndim != 1:
            raise ChartDataError(f"column {label} must be 1-D")
        return column.tolist()
    if isinstance(column, Sequence) and not isinstance(column, (str, bytes, bytearray)):
        return column
    raise ChartDataError(f"unsupported column type for {label}: {type(column)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError):
            LOGGER.debug("%s contains non-numeric value at index %d: %r", label, i, raw)
            out[i] = np.nan
    return out
