import numpy as np
import pytest

from palette_explorer.tiles import Tile, generate_tiles, subdivide, tiles_to_svg


def coverage(tiles, n=200):
    # sample cell centres; each must land in exactly one tile
    pts = (np.arange(n) + 0.5) * (100.0 / n)
    xs, ys = np.meshgrid(pts, pts)
    hits = np.zeros_like(xs, dtype=int)
    for t in tiles:
        inside = (
            (xs >= t.x) & (xs < t.x + t.width) & (ys >= t.y) & (ys < t.y + t.height)
        )
        hits += inside
    return hits


def test_partition_area():
    for seed in range(25):
        tiles = generate_tiles(5, seed)
        assert np.isclose(sum(t.area for t in tiles), 100.0 * 100.0)


def test_partition_no_gaps_or_overlaps():
    for seed in (0, 1, 7, 42):
        hits = coverage(generate_tiles(6, seed))
        assert np.all(hits == 1)


def test_indices_in_range():
    for n in (1, 2, 5, 6):
        for seed in range(10):
            assert all(0 <= t.color_index < n for t in generate_tiles(n, seed))


def test_single_colour():
    assert {t.color_index for t in generate_tiles(1, 3)} == {0}


def test_empty_palette_gives_no_tiles():
    assert generate_tiles(0, 1) == []
    assert subdivide(0, 0, 100, 100, 5, 0, np.random.default_rng(0)) == []


def test_seed_is_reproducible():
    assert generate_tiles(5, 123) == generate_tiles(5, 123)


def test_zero_depth_is_one_tile():
    tiles = generate_tiles(5, 9, depth=0)
    assert len(tiles) == 1
    t = tiles[0]
    assert (t.x, t.y, t.width, t.height) == (0.0, 0.0, 100.0, 100.0)


def test_depth_bounds_tile_count():
    for seed in range(20):
        assert 1 <= len(generate_tiles(5, seed)) <= 2**5


class ScriptedRng:
    def __init__(self, draws, picks):
        self.draws = list(draws)
        self.picks = list(picks)

    def random(self):
        return self.draws.pop(0)

    def integers(self, n):
        return self.picks.pop(0)


def test_wide_rectangle_splits_vertically():
    # continue draw, then ratio 0.3 + 0.5 * 0.4
    rng = ScriptedRng([0.1, 0.5], [2, 0])
    tiles = subdivide(0, 0, 100, 20, 1, 3, rng)
    assert tiles == [Tile(0, 0, 50.0, 20, 2), Tile(50.0, 0, 50.0, 20, 0)]


def test_tall_rectangle_splits_horizontally():
    rng = ScriptedRng([0.1, 1.0], [1, 1])
    tiles = subdivide(0, 0, 20, 100, 1, 3, rng)
    spans = [v for t in tiles for v in (t.y, t.height)]
    assert spans == pytest.approx([0, 70, 70, 30])


def test_square_uses_coin_flip():
    # depth 3 never stops early; 0.9 picks vertical, children stop on 0.8
    rng = ScriptedRng([0.9, 0.0, 0.8, 0.8], [0, 1])
    tiles = subdivide(0, 0, 50, 50, 3, 2, rng)
    spans = [v for t in tiles for v in (t.x, t.width)]
    assert spans == pytest.approx([0, 15, 15, 35])
    assert [t.color_index for t in tiles] == [0, 1]


def test_shallow_stop_draw():
    rng = ScriptedRng([0.75], [3])
    assert subdivide(0, 0, 100, 100, 2, 4, rng) == [Tile(0, 0, 100, 100, 3)]


def test_small_rectangle_is_a_leaf():
    tiles = subdivide(10, 10, 9.5, 50, 5, 4, np.random.default_rng(1))
    assert len(tiles) == 1 and tiles[0].width == 9.5


def test_partition_of_offset_rectangle():
    tiles = subdivide(20, 30, 60, 40, 4, 3, np.random.default_rng(11))
    assert np.isclose(sum(t.area for t in tiles), 60 * 40)
    assert all(t.x >= 20 - 1e-9 and t.x + t.width <= 80 + 1e-9 for t in tiles)
    assert all(t.y >= 30 - 1e-9 and t.y + t.height <= 70 + 1e-9 for t in tiles)


def test_tile_dict():
    assert Tile(1, 2, 3, 4, 0).to_dict() == {
        "x": 1,
        "y": 2,
        "width": 3,
        "height": 4,
        "colorIndex": 0,
    }


def test_svg_render():
    colors = ["#112233", "#445566"]
    tiles = generate_tiles(len(colors), 4)
    svg = tiles_to_svg(tiles, colors)
    assert svg.startswith("<svg")
    assert 'viewBox="0 0 100 100"' in svg
    assert svg.count("<rect") == len(tiles)
    used = {colors[t.color_index] for t in tiles}
    assert all(f'fill="{c}"' in svg for c in used)
