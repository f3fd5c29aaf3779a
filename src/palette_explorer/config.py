"""
Runtime settings. Only `load_settings` looks at the environment; everything
else receives a `Settings` instance (or plain values) explicitly.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_DEPTH = 8


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_MODEL
    log_level: int = logging.INFO
    max_depth: int = DEFAULT_MAX_DEPTH


def _parse_level(val: str | None) -> int:
    if not val:
        return logging.INFO
    v = val.strip()
    if v.isdigit():
        return int(v)
    level = logging.getLevelName(v.upper())
    return level if isinstance(level, int) else logging.INFO


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    key = (env.get("GEMINI_API_KEY") or env.get("API_KEY") or "").strip()
    try:
        max_depth = int(env.get("PALETTE_MAX_DEPTH", DEFAULT_MAX_DEPTH))
    except ValueError:
        max_depth = DEFAULT_MAX_DEPTH
    return Settings(
        gemini_api_key=key or None,
        gemini_model=(env.get("PALETTE_GEMINI_MODEL") or DEFAULT_MODEL).strip(),
        log_level=_parse_level(env.get("PALETTE_LOG_LEVEL")),
        max_depth=max(0, max_depth),
    )


__all__ = ["Settings", "load_settings", "DEFAULT_MODEL"]
