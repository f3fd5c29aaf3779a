from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

MIN_DIMENSION = 10.0  # in the 0..100 canvas space
STOP_P = 0.7  # shallow rectangles stop when a draw exceeds this
SHALLOW_DEPTH = 3
RATIO_LO, RATIO_SPAN = 0.3, 0.4
ROOT_DEPTH = 5


@dataclass(frozen=True)
class Tile:
    x: float
    y: float
    width: float
    height: float
    color_index: int

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "colorIndex": self.color_index,
        }


def subdivide(
    x: float,
    y: float,
    width: float,
    height: float,
    depth_budget: int,
    color_count: int,
    rng: np.random.Generator,
) -> list[Tile]:
    """
    Randomly split a rectangle into tiles that partition it exactly.

    Depth-first, first child (left/top) before second, so a given seed
    always yields the same tile order.
    """
    if color_count <= 0:
        return []

    out: list[Tile] = []
    stack: list[tuple[float, float, float, float, int]] = [
        (x, y, width, height, depth_budget)
    ]
    while stack:
        x0, y0, w, h, depth = stack.pop()

        if (
            depth <= 0
            or (depth < SHALLOW_DEPTH and rng.random() > STOP_P)
            or w < MIN_DIMENSION
            or h < MIN_DIMENSION
        ):
            out.append(Tile(x0, y0, w, h, int(rng.integers(color_count))))
            continue

        if w > h:
            vertical = True
        elif h > w:
            vertical = False
        else:
            vertical = bool(rng.random() > 0.5)

        ratio = RATIO_LO + rng.random() * RATIO_SPAN
        if vertical:
            w1 = w * ratio
            first = (x0, y0, w1, h, depth - 1)
            second = (x0 + w1, y0, w - w1, h, depth - 1)
        else:
            h1 = h * ratio
            first = (x0, y0, w, h1, depth - 1)
            second = (x0, y0 + h1, w, h - h1, depth - 1)
        # LIFO: push second first so the first child is expanded next
        stack.append(second)
        stack.append(first)
    return out


def generate_tiles(
    color_count: int, seed: int | None = None, depth: int = ROOT_DEPTH
) -> list[Tile]:
    rng = np.random.default_rng(seed)
    return subdivide(0.0, 0.0, 100.0, 100.0, depth, color_count, rng)


def tiles_to_svg(
    tiles: Sequence[Tile],
    colors: Sequence[str],
    *,
    stroke: str = "#0f172a",
    stroke_width: float = 0.5,
) -> str:
    rects = [
        f'<rect x="{t.x:.4f}" y="{t.y:.4f}" width="{t.width:.4f}" '
        f'height="{t.height:.4f}" fill="{colors[t.color_index]}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>'
        for t in tiles
    ]
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" '
        'preserveAspectRatio="none">' + "".join(rects) + "</svg>"
    )


__all__ = ["Tile", "subdivide", "generate_tiles", "tiles_to_svg"]
