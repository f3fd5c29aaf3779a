from __future__ import annotations

import logging
import math
import string
from dataclasses import dataclass, replace
from typing import Any

from coloraide import Color

log = logging.getLogger(__name__)

Hex = str

FIT_HEX = {"method": "raytrace"}  # consistent gamut-fit for hex output


@dataclass(frozen=True)
class HSL:
    h: float  # 0..360
    s: float  # 0..100
    l: float  # 0..100

    def replace(self, **changes: float) -> HSL:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, float]:
        return {"h": self.h, "s": self.s, "l": self.l}


@dataclass(frozen=True)
class ColorDefinition:
    hex: Hex
    hsl: HSL
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"hex": self.hex, "hsl": self.hsl.to_dict(), "name": self.name}


def _round_half_up(x: float) -> int:
    # Math.round semantics: .5 always goes towards +inf
    return int(math.floor(x + 0.5))


def _round1(x: float) -> float:
    return math.floor(x * 10.0 + 0.5) / 10.0


def hsl_to_hex(hsl: HSL) -> Hex:
    h = hsl.h
    l = hsl.l / 100.0
    a = hsl.s * min(l, 1.0 - l) / 100.0

    def channel(n: int) -> str:
        k = (n + h / 30.0) % 12.0
        value = l - a * max(min(k - 3.0, 9.0 - k, 1.0), -1.0)
        u8 = max(0, min(255, _round_half_up(255.0 * value)))
        return f"{u8:02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def hex_to_hsl(hex_str: str) -> HSL:
    """
    Parse '#rgb' or '#rrggbb' into HSL (integer hue, one-decimal s/l).

    Anything else quietly becomes black; callers that need validation
    should go through `canon_hex` first.
    """
    if len(hex_str) == 4:
        pairs = [hex_str[i] * 2 for i in (1, 2, 3)]
    elif len(hex_str) == 7:
        pairs = [hex_str[i : i + 2] for i in (1, 3, 5)]
    else:
        log.debug("hex_to_hsl: unsupported length %r, using black", hex_str)
        return HSL(0, 0.0, 0.0)

    try:
        r, g, b = (int(p, 16) / 255.0 for p in pairs)
    except ValueError:
        log.debug("hex_to_hsl: non-hex digits in %r, using black", hex_str)
        return HSL(0, 0.0, 0.0)

    cmin = min(r, g, b)
    cmax = max(r, g, b)
    delta = cmax - cmin

    if delta == 0:
        h = 0.0
    elif cmax == r:
        h = math.fmod((g - b) / delta, 6.0)
    elif cmax == g:
        h = (b - r) / delta + 2.0
    else:
        h = (r - g) / delta + 4.0

    hue = _round_half_up(h * 60.0)
    if hue < 0:
        hue += 360

    l = (cmax + cmin) / 2.0
    s = 0.0 if delta == 0 else delta / (1.0 - abs(2.0 * l - 1.0))
    return HSL(hue, _round1(s * 100.0), _round1(l * 100.0))


def canon_hex(s: str) -> Hex:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex only."""
    raw = (s or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise ValueError("hex must be 3 or 6 hex digits")
    return "#" + raw.lower()


def normalize_css_color(text: str) -> Hex:
    """Any CSS colour string (hex, name, rgb(), hsl() ...) → '#rrggbb'."""
    raw = (text or "").strip()
    try:
        return canon_hex(raw)
    except ValueError:
        pass
    try:
        color = Color(raw)
    except ValueError as exc:
        raise ValueError(f"unrecognised colour {text!r}") from exc
    return color.convert("srgb").to_string(hex=True, alpha=False, fit=FIT_HEX)


__all__ = [
    "HSL",
    "ColorDefinition",
    "Hex",
    "hsl_to_hex",
    "hex_to_hsl",
    "canon_hex",
    "normalize_css_color",
]
