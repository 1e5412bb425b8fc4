from .echarts import compile_echarts_option, gradient_to_echarts

__all__ = [
    "compile_echarts_option",
    "gradient_to_echarts",
]
