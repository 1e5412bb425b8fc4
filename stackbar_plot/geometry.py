from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stackbar_plot.config import ChartConfig
from stackbar_plot.errors import ChartDataError
from stackbar_plot.legend import LegendPlan
from stackbar_plot.text_metrics import max_text_width, text_size


TITLE_OFFSET_PX = 32
LEGEND_OFFSET_PX = 32
SIDE_LEGEND_PX = 80
VALUE_LABEL_PX = 80
AXIS_LABEL_MARGIN_PX = 8


@dataclass(frozen=True)
class Geometry:
    """Plot-area insets from the widget edges, in px."""

    top: float
    bottom: float
    left: float
    right: float
    contain_label: bool


@dataclass(frozen=True)
class PlotRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.right and self.y <= py <= self.bottom


def compute_geometry(config: ChartConfig, legend: LegendPlan) -> Geometry:
    """Reserve plot insets for padding, title, legend and value labels.

    With padding off, every edge that carries no title, axis or legend
    collapses to zero so a chromeless chart fills the whole widget.
    """

    padding = config.effective_padding
    has_title = bool(config.effective_title)
    shows_labels = config.shows_labels
    legend_top = legend.anchored_at("top")
    legend_bottom = legend.anchored_at("bottom")
    legend_left = legend.anchored_at("left")

    if not config.show_padding and not has_title and not legend_top:
        top = 0
    else:
        top = padding + (TITLE_OFFSET_PX if has_title else 0) + (LEGEND_OFFSET_PX if legend_top else 0)

    if not config.show_padding and not config.show_x_axis and not legend_bottom:
        bottom = 0
    else:
        bottom = padding + (LEGEND_OFFSET_PX if legend_bottom else 0)

    if not config.show_padding and not config.show_y_axis and not legend_left:
        left = 0
    else:
        left = padding + (SIDE_LEGEND_PX if legend_left else 0)

    label_room = VALUE_LABEL_PX if shows_labels else 0
    if legend.on_right:
        right = max(legend.reserved_width, label_room) + padding
    else:
        right = padding + label_room

    return Geometry(
        top=top,
        bottom=bottom,
        left=left,
        right=right,
        contain_label=config.show_x_axis or config.show_y_axis,
    )


def resolve_plot_rect(
    geometry: Geometry,
    width: float,
    height: float,
    *,
    categories: Sequence[str] = (),
    show_x_axis: bool = True,
    show_y_axis: bool = True,
    font_family: str | None = None,
    font_size: float = 12.0,
) -> PlotRect:
    """Place the plot rectangle for a widget of `width` x `height` px.

    When axis-label padding is on, room for the category labels (left) and one
    line of value tick labels (bottom) is carved out of the inset rectangle.
    """

    left = float(geometry.left)
    right = float(geometry.right)
    top = float(geometry.top)
    bottom = float(geometry.bottom)
    if geometry.contain_label:
        if show_y_axis and categories:
            left += max_text_width(categories, font_family=font_family, font_size_px=font_size) + AXIS_LABEL_MARGIN_PX
        if show_x_axis:
            bottom += text_size("0", font_family=font_family, font_size_px=max(1.0, font_size - 1))[1] + AXIS_LABEL_MARGIN_PX
    plot_w = width - left - right
    plot_h = height - top - bottom
    if plot_w <= 1 or plot_h <= 1:
        raise ChartDataError("widget too small for plotting viewport")
    return PlotRect(x=left, y=top, width=plot_w, height=plot_h)
