from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import math
import re
from typing import Any, Literal, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

LabelStyle = Literal["none", "first_only", "first_over_total"]
LegendPosition = Literal["top", "bottom", "left", "right", "top_right", "bottom_right"]
StackingMode = Literal["segmented", "cumulative_overlay", "gradient_pill"]
TargetLineAnchor = Literal["unit_axis", "category_band"]

FONT_INHERIT = "inherit"
FONT_THEME = "theme"

DEFAULT_COLORS: tuple[str, ...] = ("#2563EB", "#93C5FD", "#E2E8F0", "#60A5FA", "#BFDBFE", "#DBEAFE")

LABEL_STYLES: tuple[str, ...] = ("none", "first_only", "first_over_total")
LEGEND_POSITIONS: tuple[str, ...] = ("top", "bottom", "left", "right", "top_right", "bottom_right")
STACKING_MODES: tuple[str, ...] = ("segmented", "cumulative_overlay", "gradient_pill")
TARGET_LINE_ANCHORS: tuple[str, ...] = ("unit_axis", "category_band")

# Editor-panel spellings sent by the host.
_LABEL_STYLE_ALIASES = {
    "None": "none",
    "First Value Only": "first_only",
    "First Value / Total": "first_over_total",
}
_FONT_ALIASES = {
    "Default": FONT_INHERIT,
    "Workbook Theme": FONT_THEME,
}


@dataclass(frozen=True)
class ChartConfig:
    """Display options for one stacked bar chart."""

    title: str = ""
    show_title: bool = True
    corner_radius: int = 8
    bar_thickness: int = 20
    padding: int = 16
    show_padding: bool = True
    label_style: LabelStyle = "none"
    show_legend: bool = True
    legend_position: LegendPosition = "bottom"
    show_x_axis: bool = True
    show_y_axis: bool = True
    font_family: str = FONT_INHERIT
    font_size: int = 12
    interactive: bool = True
    hover_emphasis: bool = True
    show_tooltip: bool = True
    show_target_line: bool = False
    target_line_value: float = math.nan
    target_line_color: str = "#000000"
    target_line_thickness: int = 2
    target_line_height: float = 100.0
    target_line_anchor: TargetLineAnchor = "unit_axis"
    stacking_mode: StackingMode = "segmented"
    colors: tuple[str, ...] = DEFAULT_COLORS

    def __post_init__(self) -> None:
        if self.corner_radius < 0:
            raise ValueError("corner_radius must be >= 0")
        if self.bar_thickness <= 0:
            raise ValueError("bar_thickness must be > 0")
        if self.padding < 0:
            raise ValueError("padding must be >= 0")
        if self.font_size <= 0:
            raise ValueError("font_size must be > 0")
        if self.target_line_thickness <= 0:
            raise ValueError("target_line_thickness must be > 0")
        if not self.target_line_height > 0:
            raise ValueError("target_line_height must be > 0")
        if self.label_style not in LABEL_STYLES:
            raise ValueError(f"unsupported label_style: {self.label_style}")
        if self.legend_position not in LEGEND_POSITIONS:
            raise ValueError(f"unsupported legend_position: {self.legend_position}")
        if self.stacking_mode not in STACKING_MODES:
            raise ValueError(f"unsupported stacking_mode: {self.stacking_mode}")
        if self.target_line_anchor not in TARGET_LINE_ANCHORS:
            raise ValueError(f"unsupported target_line_anchor: {self.target_line_anchor}")
        if not self.colors:
            raise ValueError("colors must include at least one color")

    @property
    def effective_title(self) -> str:
        return self.title if self.show_title else ""

    @property
    def effective_padding(self) -> int:
        return self.padding if self.show_padding else 0

    @property
    def shows_labels(self) -> bool:
        return self.label_style != "none"


DEFAULT_CONFIG = ChartConfig()

_BOOL_OPTIONS = (
    "show_title",
    "show_padding",
    "show_legend",
    "show_x_axis",
    "show_y_axis",
    "interactive",
    "hover_emphasis",
    "show_tooltip",
    "show_target_line",
)
_INT_OPTIONS = ("corner_radius", "bar_thickness", "padding", "font_size", "target_line_thickness")
_PALETTE_SLOTS = ("color1", "color2", "color3")


def validate_chart_config(overrides: Mapping[str, Any] | None = None) -> ChartConfig:
    """Validate and merge host option overrides against the chart defaults.

    Accepts both the snake_case field names and the editor-panel spellings the
    host sends (dropdown labels, numeric strings, `color1`..`color3` slots).
    """

    raw: dict[str, Any] = asdict(DEFAULT_CONFIG)
    known = {f.name for f in fields(ChartConfig)}
    slots: dict[int, Any] = {}
    if overrides:
        for key, value in overrides.items():
            if key in _PALETTE_SLOTS:
                if value is not None:
                    slots[_PALETTE_SLOTS.index(key)] = value
                continue
            if key not in known:
                raise ValueError(f"Unknown chart option: {key}")
            if value is None:
                continue
            raw[key] = value
    palette = list(raw["colors"])
    for idx, color in slots.items():
        if idx < len(palette):
            palette[idx] = color
        else:
            palette.append(color)

    for key in _BOOL_OPTIONS:
        if not isinstance(raw[key], bool):
            raise ValueError(f"Option `{key}` must be a boolean")
    for key in _INT_OPTIONS:
        raw[key] = _coerce_int(key, raw[key])

    if not isinstance(raw["title"], str):
        raise ValueError("Option `title` must be a string")
    raw["label_style"] = _LABEL_STYLE_ALIASES.get(raw["label_style"], raw["label_style"])
    raw["legend_position"] = _normalize_choice(raw["legend_position"])
    raw["stacking_mode"] = _normalize_choice(raw["stacking_mode"])
    raw["target_line_anchor"] = _normalize_choice(raw["target_line_anchor"])

    font_family = raw["font_family"]
    if not isinstance(font_family, str) or not font_family.strip():
        raise ValueError("Option `font_family` must be a non-empty string")
    raw["font_family"] = _FONT_ALIASES.get(font_family, font_family)

    raw["target_line_value"] = _coerce_target_value(raw["target_line_value"])
    raw["target_line_height"] = _coerce_float("target_line_height", raw["target_line_height"])

    for key in ("target_line_color",):
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Option `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    for color in palette:
        if not isinstance(color, str) or not _HEX_COLOR.match(color):
            raise ValueError(f"Palette color {color!r} must be a hex color (#RRGGBB or #RRGGBBAA)")
    raw["colors"] = tuple(palette)

    return ChartConfig(**raw)


def _normalize_choice(value: Any) -> str:
    # "Top Right" -> "top_right", "Cumulative Overlay" -> "cumulative_overlay"
    return str(value).strip().lower().replace(" ", "_").replace("-", "_")


def _coerce_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Option `{key}` must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Option `{key}` must be an integer") from exc


def _coerce_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Option `{key}` must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Option `{key}` must be a number") from exc


def _coerce_target_value(value: Any) -> float:
    if isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan
