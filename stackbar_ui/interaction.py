from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Mapping


@dataclass(frozen=True)
class PointerClick:
    """Pointer click in surface-local device px (origin top-left)."""

    offset_x: float
    offset_y: float
    button: int = 0


def parse_pointer_click(event_type: str, payload: object) -> PointerClick | None:
    """Parse a raw surface `click` payload into a typed pointer click.

    Accepts `offsetX`/`offsetY` (canvas event naming) or `x`/`y`. Anything
    else, including non-finite coordinates, yields None.
    """

    if event_type != "click" or not isinstance(payload, Mapping):
        return None
    raw_x = payload.get("offsetX", payload.get("x"))
    raw_y = payload.get("offsetY", payload.get("y"))
    try:
        x = float(raw_x)  # type: ignore[arg-type]
        y = float(raw_y)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    raw_button = payload.get("button", 0)
    button = int(raw_button) if isinstance(raw_button, (int, float)) and not isinstance(raw_button, bool) else 0
    return PointerClick(offset_x=x, offset_y=y, button=button)
