from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Sequence

from stackbar_plot.config import ChartConfig, DEFAULT_CONFIG
from stackbar_plot.errors import ChartDataError
from stackbar_plot.fonts import FontProvider, resolve_font
from stackbar_plot.geometry import Geometry, compute_geometry
from stackbar_plot.labels import tooltip_lines
from stackbar_plot.legend import LegendPlan, plan_legend
from stackbar_plot.rows import Row
from stackbar_plot.series import BarSeries
from stackbar_plot.stacking import build_series
from stackbar_plot.target_line import TargetLine, position_target_line


LOGGER = logging.getLogger(__name__)

TITLE_COLOR = "#1e293b"
LEGEND_TEXT_COLOR = "#64748b"
VALUE_AXIS_LABEL_COLOR = "#94a3b8"
CATEGORY_AXIS_LABEL_COLOR = "#475569"


@dataclass(frozen=True)
class TitleSpec:
    text: str
    top: float
    font_size: int
    font_family: str | None = None
    font_weight: int = 600
    color: str = TITLE_COLOR
    align: Literal["left"] = "left"


@dataclass(frozen=True)
class TooltipSpec:
    show: bool
    trigger: Literal["axis"] = "axis"
    axis_pointer: Literal["shadow"] = "shadow"
    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class LegendSpec:
    plan: LegendPlan
    names: tuple[str, ...]
    font_size: int
    font_family: str | None = None
    color: str = LEGEND_TEXT_COLOR


@dataclass(frozen=True)
class ValueAxisSpec:
    show: bool
    label_font_size: int
    font_family: str | None = None
    label_color: str = VALUE_AXIS_LABEL_COLOR


@dataclass(frozen=True)
class CategoryAxisSpec:
    categories: tuple[str, ...]
    show_labels: bool
    label_font_size: int
    font_family: str | None = None
    label_color: str = CATEGORY_AXIS_LABEL_COLOR
    inverse: bool = False


@dataclass(frozen=True)
class UnitAxisSpec:
    """Hidden 0-1 axis spanning the plot height, used only for overlay placement."""

    min: float = 0.0
    max: float = 1.0


@dataclass(frozen=True)
class ChartSpecification:
    title: TitleSpec | None
    tooltip: TooltipSpec
    legend: LegendSpec
    geometry: Geometry
    value_axis: ValueAxisSpec
    category_axis: CategoryAxisSpec
    unit_axis: UnitAxisSpec | None
    series: tuple[BarSeries, ...]
    target_line: TargetLine | None
    font_family: str | None
    interactive: bool

    @property
    def row_count(self) -> int:
        return len(self.category_axis.categories)

    def target_line_carrier(self) -> BarSeries | None:
        for s in self.series:
            if s.carries_target_line:
                return s
        return None


def build_chart_specification(
    rows: Sequence[Row],
    names: Sequence[str],
    config: ChartConfig = DEFAULT_CONFIG,
    *,
    font_provider: FontProvider | None = None,
) -> ChartSpecification | None:
    """Assemble the full render-ready chart specification.

    Returns None when there is nothing to draw (no rows or no series); the
    host shows its configuration prompt in that case.
    """

    if not rows or not names:
        LOGGER.debug("no rows or series to chart")
        return None
    for row in rows:
        if len(row.values) != len(names):
            raise ChartDataError(
                f"row {row.category!r} has {len(row.values)} values for {len(names)} series"
            )

    names = tuple(names)
    font_family = resolve_font(config.font_family, font_provider)
    legend_plan = plan_legend(config, names)
    geometry = compute_geometry(config, legend_plan)
    series = build_series(rows, names, config, font_family=font_family)
    target = position_target_line(config, len(rows))

    title_text = config.effective_title
    title = None
    if title_text:
        title = TitleSpec(
            text=title_text,
            top=config.effective_padding / 2,
            font_size=config.font_size + 3,
            font_family=font_family,
        )

    show_tooltip = config.interactive and config.show_tooltip
    tooltip = TooltipSpec(
        show=show_tooltip,
        rows=tuple(tooltip_lines(row, names) for row in rows) if show_tooltip else (),
    )

    return ChartSpecification(
        title=title,
        tooltip=tooltip,
        legend=LegendSpec(plan=legend_plan, names=names, font_size=config.font_size, font_family=font_family),
        geometry=geometry,
        value_axis=ValueAxisSpec(
            show=config.show_x_axis,
            label_font_size=max(1, config.font_size - 1),
            font_family=font_family,
        ),
        category_axis=CategoryAxisSpec(
            categories=tuple(row.category for row in rows),
            show_labels=config.show_y_axis,
            label_font_size=config.font_size,
            font_family=font_family,
        ),
        unit_axis=UnitAxisSpec() if target is not None and target.uses_unit_axis else None,
        series=series,
        target_line=target,
        font_family=font_family,
        interactive=config.interactive,
    )
