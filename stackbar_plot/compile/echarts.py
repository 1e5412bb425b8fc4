from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable

from stackbar_plot.series import BarDatum, BarSeries, LabelSpec, LinearGradient
from stackbar_plot.spec import ChartSpecification
from stackbar_plot.target_line import TargetLine


TooltipFormatterFactory = Callable[[tuple[tuple[str, ...], ...]], Any]

TARGET_CARRIER_NAME = "__target__"


def compile_echarts_option(
    spec: ChartSpecification,
    *,
    tooltip_formatter: TooltipFormatterFactory | None = None,
) -> dict[str, Any]:
    """Translate a chart specification into an ECharts option mapping.

    Everything emitted is JSON-safe. Tooltip bodies are precomputed per row on
    `spec.tooltip` and, by default, attached to every datum with an item
    trigger. A host that can pass callables to the renderer supplies
    `tooltip_formatter` instead to get one axis-triggered formatter.
    """

    font = _font_style(spec.font_family)
    option: dict[str, Any] = {
        "tooltip": _tooltip(spec, tooltip_formatter),
        "legend": _legend(spec, font),
        "grid": {
            "top": spec.geometry.top,
            "bottom": spec.geometry.bottom,
            "left": spec.geometry.left,
            "right": spec.geometry.right,
            "containLabel": spec.geometry.contain_label,
        },
        "xAxis": {
            "type": "value",
            "show": spec.value_axis.show,
            "splitLine": {"show": False},
            "axisLine": {"show": False},
            "axisTick": {"show": False},
            "axisLabel": {**font, "color": spec.value_axis.label_color, "fontSize": spec.value_axis.label_font_size},
        },
        "series": [],
    }
    if spec.title is not None:
        option["title"] = {
            "text": spec.title.text,
            "left": spec.title.align,
            "top": spec.title.top,
            "textStyle": {
                **font,
                "fontSize": spec.title.font_size,
                "fontWeight": spec.title.font_weight,
                "color": spec.title.color,
            },
        }

    category_axis = {
        "type": "category",
        "data": list(spec.category_axis.categories),
        "inverse": spec.category_axis.inverse,
        "axisLine": {"show": False},
        "axisTick": {"show": False},
        "axisLabel": {
            **font,
            "show": spec.category_axis.show_labels,
            "color": spec.category_axis.label_color,
            "fontSize": spec.category_axis.label_font_size,
        },
    }
    if spec.unit_axis is not None:
        option["yAxis"] = [
            category_axis,
            {"type": "value", "show": False, "min": spec.unit_axis.min, "max": spec.unit_axis.max},
        ]
    else:
        option["yAxis"] = category_axis

    # Without a formatter hook each datum carries its row's precomputed tooltip.
    item_tooltips = _item_tooltips(spec) if spec.tooltip.show and tooltip_formatter is None else ()
    series_out: list[dict[str, Any]] = []
    target = spec.target_line
    for s in spec.series:
        compiled = _bar_series(s, item_tooltips)
        if target is not None and s.carries_target_line and not target.uses_unit_axis:
            compiled["markLine"] = _mark_line(target)
        series_out.append(compiled)
    if target is not None and target.uses_unit_axis:
        series_out.append(_unit_axis_carrier(target))
    option["series"] = series_out
    return option


def gradient_to_echarts(gradient: LinearGradient) -> str | dict[str, Any]:
    if gradient.is_flat:
        return gradient.stops[0].color
    return {
        "type": "linear",
        "x": 0,
        "y": 0,
        "x2": 1,
        "y2": 0,
        "colorStops": [{"offset": stop.offset, "color": stop.color} for stop in gradient.stops],
    }


def _font_style(font_family: str | None) -> dict[str, Any]:
    return {"fontFamily": font_family} if font_family else {}


def _tooltip(spec: ChartSpecification, formatter: TooltipFormatterFactory | None) -> dict[str, Any]:
    if not spec.tooltip.show:
        return {"show": False}
    if formatter is None:
        # Raw series values are running sums in overlay mode and a single pill
        # in gradient mode, so the per-item text is the only correct default.
        return {"trigger": "item"}
    return {
        "trigger": spec.tooltip.trigger,
        "axisPointer": {"type": spec.tooltip.axis_pointer},
        "formatter": formatter(spec.tooltip.rows),
    }


def _item_tooltips(spec: ChartSpecification) -> tuple[str, ...]:
    return tuple(_literal("<br/>".join(lines)) for lines in spec.tooltip.rows)


def _literal(text: str) -> str:
    # ECharts treats `{` as a template marker in formatter strings.
    return text.replace("{", "(").replace("}", ")")


def _legend(spec: ChartSpecification, font: dict[str, Any]) -> dict[str, Any]:
    plan = spec.legend.plan
    if not plan.show:
        return {"show": False}
    anchor = {key: value for key, value in asdict(plan.anchor).items() if value is not None}
    return {
        "orient": plan.orient,
        **anchor,
        "data": list(spec.legend.names),
        "itemStyle": {"borderWidth": 0},
        "textStyle": {**font, "color": spec.legend.color, "fontSize": spec.legend.font_size},
    }


def _label(label: LabelSpec | None) -> dict[str, Any]:
    if label is None:
        return {"show": False}
    return {
        "show": True,
        "position": label.position,
        "color": label.color,
        "fontSize": label.font_size,
        **_font_style(label.font_family),
    }


def _datum(datum: BarDatum, label_text: str | None, tooltip_text: str | None = None) -> float | dict[str, Any]:
    if datum.fill is None and label_text is None and tooltip_text is None:
        return datum.value
    item: dict[str, Any] = {"value": datum.value}
    if datum.fill is not None:
        item["itemStyle"] = {"color": gradient_to_echarts(datum.fill)}
    if label_text is not None:
        item["label"] = {"formatter": _literal(label_text)}
    if tooltip_text is not None:
        item["tooltip"] = {"formatter": tooltip_text}
    return item


def _bar_series(s: BarSeries, item_tooltips: tuple[str, ...] = ()) -> dict[str, Any]:
    if s.legend_stub:
        return {
            "name": s.name,
            "type": "bar",
            "data": [],
            "barWidth": 0,
            "itemStyle": {"color": s.color},
            "silent": True,
            "emphasis": {"disabled": True},
            "tooltip": {"show": False},
            "label": {"show": False},
        }
    texts = s.label.texts if s.label is not None else ()
    data = [
        _datum(
            d,
            texts[i] if i < len(texts) else None,
            item_tooltips[i] if i < len(item_tooltips) else None,
        )
        for i, d in enumerate(s.data)
    ]
    out: dict[str, Any] = {
        "name": s.name,
        "type": "bar",
        "barWidth": s.bar_width,
        "data": data,
        "itemStyle": {"color": s.color, "borderRadius": list(s.corner_radius.as_tuple())},
        "silent": s.hover.silent,
        "emphasis": {} if s.hover.emphasis else {"disabled": True},
        "label": _label(s.label),
    }
    if s.stack is not None:
        out["stack"] = s.stack
    if s.bar_gap is not None:
        out["barGap"] = s.bar_gap
    return out


def _mark_line(target: TargetLine) -> dict[str, Any]:
    if target.span is None:
        data: list[Any] = [{"xAxis": target.value}]
    else:
        start, end = target.span
        data = [[{"coord": [target.value, start]}, {"coord": [target.value, end]}]]
    return {
        "symbol": ["none", "none"],
        "silent": target.silent,
        "lineStyle": {"color": target.color, "width": target.thickness, "type": "solid"},
        "label": {"show": False},
        "data": data,
    }


def _unit_axis_carrier(target: TargetLine) -> dict[str, Any]:
    # Empty series bound to the hidden 0-1 axis so markLine coords resolve against it.
    return {
        "name": TARGET_CARRIER_NAME,
        "type": "line",
        "yAxisIndex": 1,
        "data": [],
        "silent": True,
        "tooltip": {"show": False},
        "markLine": _mark_line(target),
    }
