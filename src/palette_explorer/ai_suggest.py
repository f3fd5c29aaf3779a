# ai_suggest.py – mood text → base colour + harmony rule via Gemini

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from google import genai
from google.genai import types

from .color_math import HSL, Hex, hex_to_hsl, normalize_css_color
from .config import DEFAULT_MODEL
from .harmony import HarmonyRule

log = logging.getLogger(__name__)

MAX_DESCRIPTION = 100

PROMPT = (
    "Generate a base color (hex) and suggest a color harmony rule based on "
    'this mood/description: "{mood}". Explain briefly why.'
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "baseHex": types.Schema(
            type=types.Type.STRING,
            description="The base color in hexadecimal format (e.g. #FF5500)",
        ),
        "harmony": types.Schema(
            type=types.Type.STRING,
            enum=[r.value for r in HarmonyRule],
            description="The type of color harmony to apply.",
        ),
        "description": types.Schema(
            type=types.Type.STRING,
            description=f"A very short explanation (max {MAX_DESCRIPTION} chars).",
        ),
    },
    required=["baseHex", "harmony", "description"],
)


class SuggestionError(RuntimeError):
    """The model could not produce a usable suggestion."""


class SuggestionUnavailable(SuggestionError):
    """No credential configured; suggestions are permanently off."""


@dataclass(frozen=True)
class Suggestion:
    base_hex: Hex
    harmony: HarmonyRule
    description: str

    @property
    def base_hsl(self) -> HSL:
        return hex_to_hsl(self.base_hex)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseHex": self.base_hex,
            "harmony": self.harmony.value,
            "description": self.description,
            "baseHsl": self.base_hsl.to_dict(),
        }


def _strip_fences(text: str) -> str:
    raw = text.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
        if raw.endswith("```"):
            raw = raw[:-3]
        raw = raw.strip()
        if raw.startswith("json"):
            raw = raw[4:].strip()
    return raw


def parse_suggestion(text: str | None) -> Suggestion:
    if not text:
        raise SuggestionError("empty response from model")
    try:
        data = json.loads(_strip_fences(text))
    except json.JSONDecodeError as exc:
        raise SuggestionError(f"response is not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SuggestionError("response is not a JSON object")

    missing = [k for k in ("baseHex", "harmony", "description") if k not in data]
    if missing:
        raise SuggestionError(f"response missing {', '.join(missing)}")

    harmony = HarmonyRule.parse(data["harmony"])
    if harmony is None:
        raise SuggestionError(f"unknown harmony {data['harmony']!r}")
    try:
        base_hex = normalize_css_color(str(data["baseHex"]))
    except ValueError as exc:
        raise SuggestionError(str(exc)) from exc

    description = str(data["description"]).strip()[:MAX_DESCRIPTION]
    return Suggestion(base_hex=base_hex, harmony=harmony, description=description)


class SuggestionClient:
    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ) -> None:
        self.model = model
        self._api_key = (api_key or "").strip() or None
        self._client = client
        if self._client is None and self._api_key:
            self._client = genai.Client(api_key=self._api_key)

    @property
    def enabled(self) -> bool:
        return self._api_key is not None

    def suggest(self, mood: str) -> Suggestion:
        mood = (mood or "").strip()
        if not mood:
            raise ValueError("mood must not be empty")
        if not self.enabled:
            raise SuggestionUnavailable("no Gemini API key configured")

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=PROMPT.format(mood=mood),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )
            text = response.text
        except Exception as exc:
            log.exception("Gemini request failed")
            raise SuggestionError(f"request failed: {exc}") from exc

        try:
            return parse_suggestion(text)
        except SuggestionError:
            log.warning("Unusable Gemini response: %.200r", text)
            raise


__all__ = [
    "Suggestion",
    "SuggestionClient",
    "SuggestionError",
    "SuggestionUnavailable",
    "parse_suggestion",
]
