from __future__ import annotations

import math
from typing import Sequence

from stackbar_plot.config import LabelStyle
from stackbar_plot.rows import Row


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_count(value: float, *, thousands_sep: str = ",") -> str:
    """Round to an integer and group thousands, e.g. 1234.5 -> "1,235"."""

    if not math.isfinite(value):
        return str(value)
    out = f"{round_half_up(value):,}"
    if thousands_sep != ",":
        out = out.replace(",", thousands_sep)
    return out


def format_value_label(row: Row, style: LabelStyle, *, thousands_sep: str = ",") -> str | None:
    if style == "none":
        return None
    first = row.values[0] if row.values else 0.0
    if style == "first_only":
        return format_count(first, thousands_sep=thousands_sep)
    return f"{format_count(first, thousands_sep=thousands_sep)} / {format_count(row.total, thousands_sep=thousands_sep)}"


def value_labels(rows: Sequence[Row], style: LabelStyle, *, thousands_sep: str = ",") -> tuple[str, ...] | None:
    if style == "none":
        return None
    return tuple(format_value_label(row, style, thousands_sep=thousands_sep) or "" for row in rows)


def tooltip_lines(row: Row, names: Sequence[str], *, thousands_sep: str = ",") -> tuple[str, ...]:
    lines = [f"<b>{row.category}</b>"]
    for i, name in enumerate(names):
        value = row.values[i] if i < len(row.values) else 0.0
        lines.append(f"{name}: {format_count(value, thousands_sep=thousands_sep)}")
    lines.append(f"Total: {format_count(row.total, thousands_sep=thousands_sep)}")
    return tuple(lines)
