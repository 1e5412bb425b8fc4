from __future__ import annotations

from stackbar_plot.geometry import PlotRect

from .hit_test import ClickListener
from .interaction import parse_pointer_click


class HeadlessSurface:
    """In-process stand-in for a rendering surface.

    Holds a fixed plot rectangle and forwards raw `click` payloads to the
    registered listeners; used by the CLI and by hosts without a canvas.
    """

    def __init__(self, rect: PlotRect | None = None) -> None:
        self._rect = rect
        self._handlers: dict[str, list[ClickListener]] = {}

    def on(self, event: str, handler: ClickListener) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: ClickListener) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def plot_rect(self) -> PlotRect | None:
        return self._rect

    def set_plot_rect(self, rect: PlotRect | None) -> None:
        self._rect = rect

    def listener_count(self, event: str = "click") -> int:
        return len(self._handlers.get(event, []))

    def dispatch(self, event_type: str, payload: object) -> bool:
        click = parse_pointer_click(event_type, payload)
        if click is None:
            return False
        for handler in tuple(self._handlers.get(event_type, [])):
            handler(click)
        return True
