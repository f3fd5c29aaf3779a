from __future__ import annotations

import logging
import math
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

# Project-local algorithms
from .ai_suggest import SuggestionClient, SuggestionError, SuggestionUnavailable
from .color_math import HSL, canon_hex, hex_to_hsl
from .config import Settings, load_settings
from .harmony import HarmonyRule, generate_palette
from .tiles import ROOT_DEPTH, generate_tiles, tiles_to_svg

log = logging.getLogger(__name__)

DEFAULT_BASE = HSL(210, 70.0, 50.0)
DEFAULT_HARMONY = HarmonyRule.COMPLEMENTARY

NO_KEY_MESSAGE = (
    "AI suggestions are disabled: set GEMINI_API_KEY on the server to enable them."
)
GENERIC_FAILURE = "could not generate a palette"


def _float_arg(name: str, default: float) -> float:
    val = request.args.get(name)
    if val is None or val.strip() == "":
        return default
    try:
        out = float(val)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None
    if not math.isfinite(out):
        raise ValueError(f"{name} must be a number")
    return out


def _int_arg(name: str, default: int, minimum: int | None = None) -> int:
    val = request.args.get(name)
    if val is None or val.strip() == "":
        return default
    try:
        out = int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if minimum is not None and out < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return out


def parse_base() -> HSL:
    """Base colour from ?hex= or ?h=&s=&l=; hue wraps, s/l clamp to 0..100."""
    hex_arg = request.args.get("hex")
    if hex_arg:
        return hex_to_hsl(canon_hex(hex_arg))
    h = _float_arg("h", DEFAULT_BASE.h) % 360.0
    s = min(100.0, max(0.0, _float_arg("s", DEFAULT_BASE.s)))
    l = min(100.0, max(0.0, _float_arg("l", DEFAULT_BASE.l)))
    return HSL(h, s, l)


def palette_payload(base: HSL, harmony: str | HarmonyRule) -> dict[str, Any]:
    rule = harmony if isinstance(harmony, HarmonyRule) else HarmonyRule.parse(harmony)
    colors = generate_palette(base, rule if rule is not None else harmony)
    return {
        "base": base.to_dict(),
        "harmony": rule.value if rule is not None else None,
        "colors": [c.to_dict() for c in colors],
    }


# ----------------------------- Flask app ----------------------------------


def create_app(
    settings: Settings | None = None, *, suggester: SuggestionClient | None = None
) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.update(
        GEMINI_MODEL=settings.gemini_model,
        AI_ENABLED=bool(settings.gemini_api_key),
        MAX_DEPTH=settings.max_depth,
    )
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")

    if suggester is None:
        suggester = SuggestionClient(
            settings.gemini_api_key, model=settings.gemini_model
        )
    if not suggester.enabled:
        log.info("GEMINI_API_KEY not set; AI suggestions disabled")

    @app.route("/")
    def index():
        return render_template(
            "index.html",
            rules=list(HarmonyRule),
            default_base=DEFAULT_BASE,
            default_harmony=DEFAULT_HARMONY,
            ai_enabled=suggester.enabled,
            no_key_message=NO_KEY_MESSAGE,
        )

    @app.route("/palette")
    def palette():
        try:
            base = parse_base()
        except ValueError as e:
            return jsonify({"error": f"invalid colour: {e}"}), 400
        harmony = request.args.get("harmony") or DEFAULT_HARMONY.value
        return jsonify(palette_payload(base, harmony))

    @app.route("/tiles")
    def tiles():
        try:
            n = _int_arg("n", 5)
            seed = _int_arg("seed", 0, minimum=0)
            depth = _int_arg("depth", ROOT_DEPTH)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        if n < 0:
            return jsonify({"error": "n must be >= 0"}), 400
        depth = max(0, min(depth, app.config["MAX_DEPTH"]))
        return jsonify([t.to_dict() for t in generate_tiles(n, seed, depth)])

    @app.route("/canvas.svg")
    def canvas_svg():
        try:
            base = parse_base()
            seed = _int_arg("seed", 0, minimum=0)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        harmony = request.args.get("harmony") or DEFAULT_HARMONY.value
        colors = [c.hex for c in generate_palette(base, harmony)]
        svg = tiles_to_svg(generate_tiles(len(colors), seed), colors)
        return Response(svg, mimetype="image/svg+xml")

    @app.get("/suggest")
    def suggest_status():
        return jsonify(
            {
                "enabled": suggester.enabled,
                "message": None if suggester.enabled else NO_KEY_MESSAGE,
            }
        )

    @app.post("/suggest")
    def suggest():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        mood = str(data.get("mood") or "").strip()
        if not mood:
            return jsonify({"error": "mood must not be empty"}), 400
        try:
            suggestion = suggester.suggest(mood)
        except SuggestionUnavailable:
            return jsonify({"error": NO_KEY_MESSAGE, "disabled": True}), 503
        except SuggestionError:
            return jsonify({"error": GENERIC_FAILURE}), 502

        payload = suggestion.to_dict()
        payload["palette"] = palette_payload(suggestion.base_hsl, suggestion.harmony)
        return jsonify(payload)

    return app


def main() -> None:
    create_app().run(debug=False, threaded=True)


if __name__ == "__main__":
    main()
