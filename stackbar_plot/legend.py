from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from stackbar_plot.config import ChartConfig, LegendPosition


LegendOrient = Literal["horizontal", "vertical"]

# Swatch (20px) plus gap (8px), then an average glyph width per character.
LEGEND_SWATCH_AND_GAP_PX = 28
LEGEND_CHAR_WIDTH_PX = 7

VERTICAL_POSITIONS: frozenset[str] = frozenset({"left", "right", "top_right", "bottom_right"})
RIGHT_POSITIONS: frozenset[str] = frozenset({"right", "top_right", "bottom_right"})


@dataclass(frozen=True)
class LegendAnchor:
    """Legend box placement; numbers are px offsets from the named edge."""

    top: float | Literal["middle"] | None = None
    bottom: float | None = None
    left: float | Literal["center"] | None = None
    right: float | None = None


@dataclass(frozen=True)
class LegendPlan:
    show: bool
    position: LegendPosition
    orient: LegendOrient
    anchor: LegendAnchor
    reserved_width: int

    def anchored_at(self, position: LegendPosition) -> bool:
        return self.show and self.position == position

    @property
    def on_right(self) -> bool:
        return self.show and self.position in RIGHT_POSITIONS


def legend_orient(position: LegendPosition) -> LegendOrient:
    return "vertical" if position in VERTICAL_POSITIONS else "horizontal"


def legend_anchor(position: LegendPosition, effective_padding: float) -> LegendAnchor:
    half = effective_padding / 2
    if position == "top":
        return LegendAnchor(top=half, left="center")
    if position == "left":
        return LegendAnchor(left=half, top="middle")
    if position == "right":
        return LegendAnchor(right=half, top="middle")
    if position == "top_right":
        return LegendAnchor(top=half, right=half)
    if position == "bottom_right":
        return LegendAnchor(bottom=half, right=half)
    return LegendAnchor(bottom=half, left="center")


def reserved_legend_width(names: Sequence[str]) -> int:
    longest = max((len(name) for name in names), default=0)
    return LEGEND_SWATCH_AND_GAP_PX + LEGEND_CHAR_WIDTH_PX * longest


def plan_legend(config: ChartConfig, names: Sequence[str]) -> LegendPlan:
    position = config.legend_position
    on_right = config.show_legend and position in RIGHT_POSITIONS
    return LegendPlan(
        show=config.show_legend,
        position=position,
        orient=legend_orient(position),
        anchor=legend_anchor(position, config.effective_padding),
        reserved_width=reserved_legend_width(names) if on_right else 0,
    )
