from __future__ import annotations

import logging
from typing import Protocol

from stackbar_plot.config import FONT_INHERIT, FONT_THEME


LOGGER = logging.getLogger(__name__)


class FontProvider(Protocol):
    """Reports the font the host document is currently rendering with."""

    def computed_font_family(self) -> str | None:
        ...


class StaticFontProvider:
    def __init__(self, family: str | None = None) -> None:
        self._family = family

    def computed_font_family(self) -> str | None:
        return self._family


def resolve_font(font_family: str, provider: FontProvider | None = None) -> str | None:
    """Return the font family to hand to the renderer, or None to inherit.

    The `theme` sentinel is the one place the core reads its environment: it
    asks the provider for the ambient computed font so the renderer measures
    text with the font that is actually displayed.
    """

    if not font_family or font_family == FONT_INHERIT:
        return None
    if font_family == FONT_THEME:
        if provider is None:
            LOGGER.debug("theme font requested without a font provider; inheriting")
            return None
        detected = provider.computed_font_family()
        return detected.strip() if detected and detected.strip() else None
    return font_family
