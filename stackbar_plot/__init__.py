from stackbar_plot.api import ChartInputs, prepare_inputs, stacked_bar_chart
from stackbar_plot.compile import compile_echarts_option
from stackbar_plot.config import DEFAULT_CONFIG, ChartConfig, validate_chart_config
from stackbar_plot.errors import ChartDataError
from stackbar_plot.geometry import Geometry, PlotRect, compute_geometry, resolve_plot_rect
from stackbar_plot.rows import Row, normalize_rows, series_names, target_value_from_column
from stackbar_plot.spec import ChartSpecification, build_chart_specification

__all__ = [
    "ChartConfig",
    "ChartDataError",
    "ChartInputs",
    "ChartSpecification",
    "DEFAULT_CONFIG",
    "Geometry",
    "PlotRect",
    "Row",
    "build_chart_specification",
    "compile_echarts_option",
    "compute_geometry",
    "normalize_rows",
    "prepare_inputs",
    "resolve_plot_rect",
    "series_names",
    "stacked_bar_chart",
    "target_value_from_column",
    "validate_chart_config",
]
