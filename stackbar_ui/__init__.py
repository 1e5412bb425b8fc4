from .hit_test import CategoryClick, HitTester, LiveChartState, RenderSurface, resolve_row_index
from .host import HostClickBridge
from .interaction import PointerClick, parse_pointer_click
from .surface import HeadlessSurface
from .widget import PLACEHOLDER_MESSAGE, StackedBarWidget

__all__ = [
    "CategoryClick",
    "HeadlessSurface",
    "HitTester",
    "HostClickBridge",
    "LiveChartState",
    "PLACEHOLDER_MESSAGE",
    "PointerClick",
    "RenderSurface",
    "StackedBarWidget",
    "parse_pointer_click",
    "resolve_row_index",
]
