from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from stackbar_plot.config import ChartConfig
from stackbar_plot.labels import value_labels
from stackbar_plot.rows import Row
from stackbar_plot.series import BarDatum, BarSeries, CornerRadii, GradientStop, HoverSpec, LabelSpec, LinearGradient


SEGMENT_STACK = "total"
OVERLAP_GAP = "-100%"
PILL_SERIES_NAME = "__pill__"


@dataclass(frozen=True)
class SeriesContext:
    names: tuple[str, ...]
    colors: tuple[str, ...]
    radius: float
    bar_width: float
    hover: HoverSpec
    label: LabelSpec | None


SeriesBuilder = Callable[[Sequence[Row], SeriesContext], tuple[BarSeries, ...]]


def palette_color(colors: Sequence[str], index: int) -> str:
    """Palette entry for a series; overflow series reuse the last color."""

    if not colors:
        raise ValueError("palette is empty")
    return colors[index] if index < len(colors) else colors[-1]


def value_matrix(rows: Sequence[Row], series_count: int) -> np.ndarray:
    if not rows:
        return np.zeros((0, series_count), dtype=np.float64)
    return np.asarray([row.values for row in rows], dtype=np.float64).reshape(len(rows), series_count)


def build_segmented(rows: Sequence[Row], ctx: SeriesContext) -> tuple[BarSeries, ...]:
    n = len(ctx.names)
    last = n - 1
    matrix = value_matrix(rows, n)
    out: list[BarSeries] = []
    for idx, name in enumerate(ctx.names):
        if n == 1:
            radii = CornerRadii.uniform(ctx.radius)
        elif idx == 0:
            radii = CornerRadii.left(ctx.radius)
        elif idx == last:
            radii = CornerRadii.right(ctx.radius)
        else:
            radii = CornerRadii()
        out.append(
            BarSeries(
                name=name,
                source_index=idx,
                data=tuple(BarDatum(value=float(v)) for v in matrix[:, idx]),
                color=palette_color(ctx.colors, idx),
                corner_radius=radii,
                bar_width=ctx.bar_width,
                hover=ctx.hover,
                stack=SEGMENT_STACK,
                label=ctx.label if idx == last else None,
                carries_target_line=idx == last,
            )
        )
    return tuple(out)


def build_cumulative_overlay(rows: Sequence[Row], ctx: SeriesContext) -> tuple[BarSeries, ...]:
    """Overlapping bars valued at running sums, longest drawn first.

    Each bar is fully rounded, so a rounded cap shows at every color
    transition instead of only at the two ends of the stack.
    """

    n = len(ctx.names)
    last = n - 1
    cumulative = np.cumsum(value_matrix(rows, n), axis=1)
    out: list[BarSeries] = []
    for idx in reversed(range(n)):
        out.append(
            BarSeries(
                name=ctx.names[idx],
                source_index=idx,
                data=tuple(BarDatum(value=float(v)) for v in cumulative[:, idx]),
                color=palette_color(ctx.colors, idx),
                corner_radius=CornerRadii.uniform(ctx.radius),
                bar_width=ctx.bar_width,
                hover=ctx.hover,
                bar_gap=OVERLAP_GAP,
                label=ctx.label if idx == last else None,
                carries_target_line=idx == last,
            )
        )
    return tuple(out)


def gradient_for_row(values: Sequence[float], colors: Sequence[str]) -> LinearGradient:
    """Hard-edged gradient with two stops per series at its start and end offsets."""

    arr = np.asarray(values, dtype=np.float64)
    total = float(arr.sum()) if arr.size else 0.0
    if total <= 0:
        return LinearGradient(stops=(GradientStop(offset=0.0, color=palette_color(colors, 0)),))
    ends = np.cumsum(arr)
    starts = np.concatenate(([0.0], ends[:-1]))
    offsets = np.clip(np.column_stack((starts, ends)).ravel() / total, 0.0, 1.0)
    offsets = np.maximum.accumulate(offsets)
    return LinearGradient(
        stops=tuple(
            GradientStop(offset=float(offset), color=palette_color(colors, i // 2))
            for i, offset in enumerate(offsets)
        )
    )


def build_gradient_pill(rows: Sequence[Row], ctx: SeriesContext) -> tuple[BarSeries, ...]:
    n = len(ctx.names)
    if n == 0:
        return ()
    pill = BarSeries(
        name=PILL_SERIES_NAME,
        source_index=n - 1,
        data=tuple(BarDatum(value=row.total, fill=gradient_for_row(row.values, ctx.colors)) for row in rows),
        color=palette_color(ctx.colors, 0),
        corner_radius=CornerRadii.uniform(ctx.radius),
        bar_width=ctx.bar_width,
        hover=ctx.hover,
        label=ctx.label,
        carries_target_line=True,
    )
    # The pill has no per-series identity; invisible stubs give the legend its swatches.
    stubs = tuple(
        BarSeries(
            name=name,
            source_index=idx,
            data=(),
            color=palette_color(ctx.colors, idx),
            corner_radius=CornerRadii(),
            bar_width=0.0,
            hover=HoverSpec(silent=True, emphasis=False),
            legend_stub=True,
        )
        for idx, name in enumerate(ctx.names)
    )
    return (pill,) + stubs


STACKING_BUILDERS: dict[str, SeriesBuilder] = {
    "segmented": build_segmented,
    "cumulative_overlay": build_cumulative_overlay,
    "gradient_pill": build_gradient_pill,
}


def series_context(
    rows: Sequence[Row],
    names: Sequence[str],
    config: ChartConfig,
    *,
    font_family: str | None = None,
) -> SeriesContext:
    texts = value_labels(rows, config.label_style)
    label = None
    if texts is not None:
        label = LabelSpec(texts=texts, font_size=config.font_size, font_family=font_family)
    return SeriesContext(
        names=tuple(names),
        colors=config.colors,
        radius=float(config.corner_radius),
        bar_width=float(config.bar_thickness),
        hover=HoverSpec(silent=not config.interactive, emphasis=config.interactive and config.hover_emphasis),
        label=label,
    )


def build_series(
    rows: Sequence[Row],
    names: Sequence[str],
    config: ChartConfig,
    *,
    font_family: str | None = None,
) -> tuple[BarSeries, ...]:
    try:
        builder = STACKING_BUILDERS[config.stacking_mode]
    except KeyError as exc:
        raise ValueError(f"unsupported stacking_mode: {config.stacking_mode}") from exc
    return builder(rows, series_context(rows, names, config, font_family=font_family))
