# harmony.py

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Mapping

from .color_math import HSL, ColorDefinition, hsl_to_hex

log = logging.getLogger(__name__)

RuleFn = Callable[[HSL], list[HSL]]


class HarmonyRule(str, Enum):
    MONOCHROMATIC = "monochromatic"
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    SPLIT_COMPLEMENTARY = "split_complementary"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SQUARE = "square"
    HEXAGONAL = "hexagonal"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, text: str | None) -> HarmonyRule | None:
        """Identifier, enum name or label, ignoring case, spaces and hyphens."""
        if text is None:
            return None
        key = str(text).strip().lower().replace("-", "_").replace(" ", "_")
        for rule in cls:
            label = rule.label.lower().replace("-", "_").replace(" ", "_")
            if key in (rule.value, label):
                return rule
        return None


_LABELS: Mapping[HarmonyRule, str] = {
    HarmonyRule.MONOCHROMATIC: "Monochromatic",
    HarmonyRule.ANALOGOUS: "Analogous",
    HarmonyRule.COMPLEMENTARY: "Complementary",
    HarmonyRule.SPLIT_COMPLEMENTARY: "Split Complementary",
    HarmonyRule.TRIADIC: "Triadic",
    HarmonyRule.TETRADIC: "Tetradic (Rectangle)",
    HarmonyRule.SQUARE: "Square",
    HarmonyRule.HEXAGONAL: "Hexagonal",
}


def _rot(base: HSL, deg: float) -> float:
    return (base.h + deg + 360.0) % 360.0


def _monochromatic(b: HSL) -> list[HSL]:
    return [
        b,
        b.replace(l=max(10, b.l - 20)),  # darker
        b.replace(l=min(95, b.l + 20)),  # lighter
        b.replace(s=max(10, b.s - 30), l=min(90, b.l + 10)),
        b.replace(s=min(100, b.s + 20), l=max(20, b.l - 10)),
    ]


def _analogous(b: HSL) -> list[HSL]:
    return [
        b.replace(h=_rot(b, -30)),
        b,
        b.replace(h=_rot(b, 30)),
        b.replace(h=_rot(b, 60)),
        b.replace(h=_rot(b, -60)),
    ]


def _complementary(b: HSL) -> list[HSL]:
    comp = _rot(b, 180)
    return [
        b,
        b.replace(h=comp),
        b.replace(l=min(90, b.l + 20)),
        HSL(comp, b.s, max(20, b.l - 20)),
        HSL(comp, max(0, b.s - 20), min(95, b.l + 30)),
    ]


def _split_complementary(b: HSL) -> list[HSL]:
    return [
        b,
        b.replace(h=_rot(b, 150)),
        b.replace(h=_rot(b, 210)),
        b.replace(l=max(20, b.l - 20)),
        HSL(_rot(b, 150), b.s, min(90, b.l + 20)),
    ]


def _triadic(b: HSL) -> list[HSL]:
    return [
        b,
        b.replace(h=_rot(b, 120)),
        b.replace(h=_rot(b, 240)),
        b.replace(l=min(95, b.l + 30)),
        HSL(_rot(b, 120), b.s, max(15, b.l - 20)),
    ]


def _tetradic(b: HSL) -> list[HSL]:
    return [
        b,
        b.replace(h=_rot(b, 60)),
        b.replace(h=_rot(b, 180)),
        b.replace(h=_rot(b, 240)),
        b.replace(l=min(95, b.l + 20)),
    ]


def _square(b: HSL) -> list[HSL]:
    return [
        b,
        b.replace(h=_rot(b, 90)),
        b.replace(h=_rot(b, 180)),
        b.replace(h=_rot(b, 270)),
        HSL(_rot(b, 90), b.s, min(90, b.l + 20)),
    ]


def _hexagonal(b: HSL) -> list[HSL]:
    return [b] + [b.replace(h=_rot(b, deg)) for deg in (60, 120, 180, 240, 300)]


RULES: Mapping[HarmonyRule, RuleFn] = {
    HarmonyRule.MONOCHROMATIC: _monochromatic,
    HarmonyRule.ANALOGOUS: _analogous,
    HarmonyRule.COMPLEMENTARY: _complementary,
    HarmonyRule.SPLIT_COMPLEMENTARY: _split_complementary,
    HarmonyRule.TRIADIC: _triadic,
    HarmonyRule.TETRADIC: _tetradic,
    HarmonyRule.SQUARE: _square,
    HarmonyRule.HEXAGONAL: _hexagonal,
}


def harmony_hsls(base: HSL, rule: HarmonyRule | str | None) -> list[HSL]:
    resolved = rule if isinstance(rule, HarmonyRule) else HarmonyRule.parse(rule)
    if resolved is None:
        log.debug("unknown harmony %r, returning base colour only", rule)
        return [base]
    return RULES[resolved](base)


def generate_palette(
    base: HSL, rule: HarmonyRule | str | None
) -> list[ColorDefinition]:
    """Derive the palette for `rule`; unknown rules give a one-colour palette."""
    return [ColorDefinition(hex=hsl_to_hex(c), hsl=c) for c in harmony_hsls(base, rule)]


__all__ = ["HarmonyRule", "RULES", "harmony_hsls", "generate_palette"]
