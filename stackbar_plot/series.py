from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class CornerRadii:
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    @classmethod
    def uniform(cls, radius: float) -> "CornerRadii":
        return cls(radius, radius, radius, radius)

    @classmethod
    def left(cls, radius: float) -> "CornerRadii":
        return cls(top_left=radius, bottom_left=radius)

    @classmethod
    def right(cls, radius: float) -> "CornerRadii":
        return cls(top_right=radius, bottom_right=radius)

    def as_tuple(self) -> tuple[float, float, float, float]:
        # Clockwise from top-left, the order canvas renderers expect.
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    @property
    def is_square(self) -> bool:
        return not any(self.as_tuple())


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class LinearGradient:
    """Left-to-right gradient across one bar."""

    stops: tuple[GradientStop, ...]

    def __post_init__(self) -> None:
        if not self.stops:
            raise ValueError("gradient requires at least one stop")

    @property
    def is_flat(self) -> bool:
        return len({stop.color for stop in self.stops}) == 1


@dataclass(frozen=True)
class BarDatum:
    value: float
    fill: LinearGradient | None = None


@dataclass(frozen=True)
class LabelSpec:
    texts: tuple[str, ...]
    position: Literal["right"] = "right"
    color: str = "#64748b"
    font_size: int = 12
    font_family: str | None = None


@dataclass(frozen=True)
class HoverSpec:
    silent: bool
    emphasis: bool


@dataclass(frozen=True)
class BarSeries:
    """One drawable bar series; `source_index` points back into the series names."""

    name: str
    source_index: int
    data: tuple[BarDatum, ...]
    color: str
    corner_radius: CornerRadii
    bar_width: float
    hover: HoverSpec
    stack: str | None = None
    bar_gap: str | None = None
    label: LabelSpec | None = None
    legend_stub: bool = False
    carries_target_line: bool = False

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(d.value for d in self.data)
