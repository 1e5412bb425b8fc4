from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from stackbar_plot.config import ChartConfig, validate_chart_config
from stackbar_plot.fonts import FontProvider
from stackbar_plot.rows import Row, normalize_rows, series_names
from stackbar_plot.spec import ChartSpecification, build_chart_specification


@dataclass(frozen=True)
class ChartInputs:
    rows: tuple[Row, ...]
    names: tuple[str, ...]
    config: ChartConfig


def prepare_inputs(
    data: Any,
    *,
    category_column: str | None,
    value_columns: Sequence[str] | str | None,
    column_names: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | ChartConfig | None = None,
) -> ChartInputs:
    config = options if isinstance(options, ChartConfig) else validate_chart_config(options)
    return ChartInputs(
        rows=normalize_rows(data, category_column, value_columns),
        names=series_names(value_columns, column_names),
        config=config,
    )


def stacked_bar_chart(
    data: Any,
    *,
    category_column: str | None,
    value_columns: Sequence[str] | str | None,
    column_names: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | ChartConfig | None = None,
    font_provider: FontProvider | None = None,
) -> ChartSpecification | None:
    inputs = prepare_inputs(
        data,
        category_column=category_column,
        value_columns=value_columns,
        column_names=column_names,
        options=options,
    )
    return build_chart_specification(inputs.rows, inputs.names, inputs.config, font_provider=font_provider)
