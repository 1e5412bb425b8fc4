from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from stackbar_plot.adapters.normalize import coerce_numeric_column, first_finite_value, resolve_column


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    category: str
    values: tuple[float, ...]
    total: float


def make_row(category: str, values: Sequence[float]) -> Row:
    vals = tuple(float(v) for v in values)
    return Row(category=category, values=vals, total=float(sum(vals)))


def normalize_rows(
    data: Any,
    category_column: str | None,
    value_columns: Sequence[str] | str | None,
) -> tuple[Row, ...]:
    """Build ordered, category-unique rows from host columns.

    `data` is a mapping of column id -> values or a pandas DataFrame. An
    unconfigured source (no data, no category column, no value columns) or a
    category column missing from the data yields no rows. When several source
    rows share a category only the first one is kept.
    """

    value_ids = _value_id_list(value_columns)
    if data is None or not category_column or not value_ids:
        return ()

    categories = resolve_column(data, category_column)
    if categories is None:
        LOGGER.debug("category column %s not found; no rows", category_column)
        return ()
    n_source = len(categories)

    columns = []
    for column_id in value_ids:
        raw = resolve_column(data, column_id)
        if raw is None:
            LOGGER.debug("value column %s is absent; treating as zeros", column_id)
        columns.append(coerce_numeric_column(raw, length=n_source, label=column_id))
    matrix = np.column_stack(columns) if columns else np.zeros((n_source, 0), dtype=np.float64)

    rows: list[Row] = []
    seen: set[str] = set()
    dropped = 0
    for i, raw_category in enumerate(categories):
        category = _category_text(raw_category)
        if category in seen:
            dropped += 1
            continue
        seen.add(category)
        rows.append(make_row(category, matrix[i].tolist()))
    if dropped:
        LOGGER.debug("dropped %d source rows with duplicate categories", dropped)
    return tuple(rows)


def series_names(value_columns: Sequence[str] | str | None, column_names: Mapping[str, Any] | None = None) -> tuple[str, ...]:
    """Map value column ids to display names, falling back to the id."""

    lookup = column_names or {}
    out: list[str] = []
    for column_id in _value_id_list(value_columns):
        info = lookup.get(column_id)
        if isinstance(info, Mapping):
            info = info.get("name")
        out.append(str(info) if info is not None else column_id)
    return tuple(out)


def target_value_from_column(data: Any, column_id: str | None) -> float:
    """Read the first numeric value of a target column, NaN when unavailable."""

    if data is None or not column_id:
        return float("nan")
    return first_finite_value(resolve_column(data, column_id))


def _value_id_list(value_columns: Sequence[str] | str | None) -> tuple[str, ...]:
    if value_columns is None:
        return ()
    if isinstance(value_columns, str):
        return (value_columns,)
    return tuple(value_columns)


def _category_text(raw: Any) -> str:
    # Blank cells arrive as None from mappings and NaN from DataFrames.
    if raw is None or (pd.api.types.is_scalar(raw) and pd.isna(raw)):
        return ""
    # Integer columns with blanks come back from pandas as float.
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)
