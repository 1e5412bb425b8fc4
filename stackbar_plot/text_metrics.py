from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
import re
from typing import Sequence

from PIL import ImageFont


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"

# CSS generic families resolve to the first installed concrete face.
GENERIC_FAMILIES: dict[str, tuple[str, ...]] = {
    "sansserif": ("inter", "helvetica", "arial", "dejavusans", "liberationsans"),
    "systemui": ("inter", "helvetica", "arial", "dejavusans", "liberationsans"),
    "serif": ("georgia", "times", "dejavuserif", "liberationserif"),
    "monospace": ("menlo", "consolas", "dejavusansmono", "liberationmono"),
}
FALLBACK_KEYS = GENERIC_FAMILIES["sansserif"]

FONT_DIRS: tuple[Path, ...] = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)
FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc"})

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def text_size(
    text: str,
    *,
    font_family: str | None = None,
    font_size_px: float = 12.0,
) -> tuple[int, int]:
    """Pixel (width, height) of `text`; empty text still has a line height."""

    font = _load_font(font_family or DEFAULT_FONT_FAMILY, max(1, int(round(font_size_px))))
    if not text:
        _, top, _, bottom = font.getbbox("0")
        return (0, max(1, int(bottom - top)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def max_text_width(texts: Sequence[str], *, font_family: str | None = None, font_size_px: float = 12.0) -> int:
    return max((text_size(t, font_family=font_family, font_size_px=font_size_px)[0] for t in texts), default=0)


def font_key(name: str) -> str:
    """Normalize a family or file stem: "Dejavu-Sans Bold" -> "dejavusansbold"."""

    return _NON_ALNUM.sub("", name.lower())


def font_stack_keys(font_family: str) -> tuple[str, ...]:
    """Expand a CSS font stack into lookup keys, generic families expanded in place."""

    keys: list[str] = []
    for part in font_family.split(","):
        key = font_key(part.strip().strip("'\""))
        if not key:
            continue
        keys.extend(GENERIC_FAMILIES.get(key, (key,)))
    return tuple(keys)


def match_font(keys: Sequence[str], index: dict[str, Path]) -> Path | None:
    # Exact stem first ("Arial" -> Arial.ttf), then the shortest stem with that prefix.
    for key in keys:
        if key in index:
            return index[key]
        prefixed = sorted((stem for stem in index if stem.startswith(key)), key=len)
        if prefixed:
            return index[prefixed[0]]
    return None


@lru_cache(maxsize=1)
def _font_index() -> dict[str, Path]:
    index: dict[str, Path] = {}
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES:
                index.setdefault(font_key(path.stem), path)
    LOGGER.debug("indexed %d font files", len(index))
    return index


@lru_cache(maxsize=64)
def _load_font(font_family: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    index = _font_index()
    path = match_font(font_stack_keys(font_family), index) or match_font(FALLBACK_KEYS, index)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            LOGGER.debug("unreadable font file %s; using Pillow default", path)
    return ImageFont.load_default(size=size)
