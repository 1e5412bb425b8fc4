from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Literal

from stackbar_plot.config import ChartConfig


LOGGER = logging.getLogger(__name__)

TargetPlacement = Literal["full", "category_band", "unit_axis"]


@dataclass(frozen=True)
class TargetLine:
    """Vertical overlay at `value` on the value axis.

    `span` is the (start, end) extent on the axis named by `placement`:
    category band indices for `category_band`, the hidden 0-1 axis for
    `unit_axis`, and None for a `full` height line.
    """

    value: float
    color: str
    thickness: int
    placement: TargetPlacement
    span: tuple[float, float] | None = None
    silent: bool = True

    @property
    def uses_unit_axis(self) -> bool:
        return self.placement == "unit_axis"


def band_span(row_count: int, fraction: float) -> tuple[float, float]:
    """Centered extent in band-index space, rows sitting at integer positions."""

    center = (row_count - 1) / 2
    half = (row_count - 1) * fraction / 2
    return (center - half, center + half)


def unit_span(fraction: float) -> tuple[float, float]:
    """Centered extent on a 0-1 axis covering the whole plot height."""

    half = min(1.0, fraction) / 2
    return (0.5 - half, 0.5 + half)


def position_target_line(config: ChartConfig, row_count: int) -> TargetLine | None:
    if not config.show_target_line:
        return None
    value = config.target_line_value
    if value is None or not math.isfinite(value):
        LOGGER.debug("target line enabled without a numeric value; omitting")
        return None
    color = config.target_line_color or "#000000"
    if config.target_line_height >= 100:
        return TargetLine(value=float(value), color=color, thickness=config.target_line_thickness, placement="full")
    fraction = config.target_line_height / 100
    if config.target_line_anchor == "category_band":
        return TargetLine(
            value=float(value),
            color=color,
            thickness=config.target_line_thickness,
            placement="category_band",
            span=band_span(row_count, fraction),
        )
    return TargetLine(
        value=float(value),
        color=color,
        thickness=config.target_line_thickness,
        placement="unit_axis",
        span=unit_span(fraction),
    )
