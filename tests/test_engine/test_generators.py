"""Tests for the grid, hex, isometric, radial, scatter, waves and mosaic generators."""

import pytest

from patternvora.engine.generators.grid import generate_grid
from patternvora.engine.generators.hex import generate_hex
from patternvora.engine.generators.isometric import generate_isometric
from patternvora.engine.generators.mosaic import QUARTER_TURNS
from patternvora.engine.generators.radial import generate_radial
from patternvora.engine.generators.scatter import STYLE_TYPES, TYPO_CHARS
from patternvora.engine.pipeline import generate_shape_data
from patternvora.engine.rng import SeededRandom
from patternvora.models.shape import FILL_ONLY_KINDS
from tests.conftest import PALETTE, make_config

ASSETS = {
    "assets": [
        {"id": "a1", "src": "a1.png", "enabled": True},
        {"id": "a2", "src": "a2.png", "enabled": False},
    ]
}


def _indices(shapes):
    return [s.index for s in shapes]


class LeadingSkips(SeededRandom):
    """Draws above every emit threshold for the first ``skips`` calls, 0.5 after."""

    def __init__(self, skips: int) -> None:
        super().__init__(1)
        self.skips = skips
        self.calls = 0

    def next_float(self) -> float:
        self.calls += 1
        return 0.99 if self.calls <= self.skips else 0.5


# ── Grid ──

def test_grid_25_indices_within_lattice():
    shapes = generate_shape_data(500, 500, make_config(style="grid", complexity=25))
    idx = _indices(shapes)
    assert 0 < len(shapes) <= 25
    assert all(0 <= i < 25 for i in idx)
    assert idx == sorted(set(idx))


def test_grid_skipped_cells_keep_their_index():
    shapes = generate_shape_data(500, 500, make_config(style="grid", seed=7, complexity=25))
    assert _indices(shapes) == [*range(9), 10, 11, *range(13, 19), *range(20, 24)]


@pytest.mark.parametrize(
    "generate, cells",
    [
        # 5x5 lattice
        (generate_grid, 25),
        # base 50 on 100x100: rows -1..4, cols -1..3
        (generate_hex, 30),
        # base 50 on 100x100: rows -2..7, cols -1..2
        (generate_isometric, 40),
        # complexity 25: 4 rings of 4, 7, 10 and 13 items
        (generate_radial, 34),
    ],
)
def test_lattice_skips_consume_indices(generate, cells):
    shapes = generate(100, 100, 50, make_config(complexity=25), LeadingSkips(3))
    assert _indices(shapes) == list(range(3, cells))


def test_grid_cells_centered():
    shapes = generate_shape_data(500, 500, make_config(style="grid", complexity=25))
    centers = {50.0, 150.0, 250.0, 350.0, 450.0}
    for s in shapes:
        assert s.x in centers and s.y in centers


def test_grid_single_image_mode():
    config = make_config(style="grid", custom_image={**ASSETS, "display_mode": "single"})
    shapes = generate_shape_data(400, 400, config)
    assert len(shapes) == 1
    assert shapes[0].type == "image"
    assert shapes[0].asset_id == "a1"
    assert (shapes[0].x, shapes[0].y) == (200, 200)


def test_grid_user_types_replace_defaults():
    config = make_config(style="grid", style_options={"shape_types": ["star"]})
    shapes = generate_shape_data(400, 400, config)
    assert {s.type for s in shapes} == {"star"}


# ── Hex ──

def test_hex_fixed_rotation_and_points():
    shapes = generate_shape_data(400, 400, make_config(style="hex"))
    assert shapes
    assert all(s.type == "polygon" and s.rotation == 30 and s.points == 6 for s in shapes)


def test_hex_zero_base_size_is_empty():
    assert generate_hex(400, 400, 0, make_config(style="hex"), SeededRandom(1)) == []


# ── Isometric ──

def test_isometric_all_cubes():
    config = make_config(style="isometric")
    shapes = generate_shape_data(400, 400, config)
    base = 400 * config.scale / 10
    assert shapes
    assert all(s.type == "cube" for s in shapes)
    assert all(s.size == pytest.approx(base * 1.05) for s in shapes)


def test_isometric_zero_base_size_is_empty():
    assert generate_isometric(400, 400, 0, make_config(style="isometric"), SeededRandom(1)) == []


# ── Radial ──

def test_radial_ring_capacity():
    # complexity 10 -> 3 rings of 4, 7 and 10 items
    shapes = generate_shape_data(600, 600, make_config(style="radial", complexity=10))
    assert 0 < len(shapes) <= 21
    assert all(0 <= i < 21 for i in _indices(shapes))


def test_radial_first_ring_at_center():
    shapes = generate_shape_data(600, 600, make_config(style="radial", complexity=10))
    ring0 = [s for s in shapes if s.index < 4]
    for s in ring0:
        assert s.x == pytest.approx(300)
        assert s.y == pytest.approx(300)


# ── Scatter ──

def test_scatter_count_and_vocabulary():
    config = make_config(style="bauhaus", complexity=40)
    shapes = generate_shape_data(500, 500, config)
    assert len(shapes) == 40
    assert _indices(shapes) == list(range(40))
    assert {s.type for s in shapes} <= set(STYLE_TYPES["bauhaus"])
    assert {s.color for s in shapes} <= set(PALETTE.colors)


def test_scatter_typo_chars():
    shapes = generate_shape_data(500, 500, make_config(style="typo", complexity=20))
    assert all(s.type == "char" and s.char in TYPO_CHARS for s in shapes)


def test_scatter_uses_enabled_assets_only():
    config = make_config(style="custom-image", complexity=30, custom_image=ASSETS)
    shapes = generate_shape_data(500, 500, config)
    assert all(s.type == "image" and s.asset_id == "a1" for s in shapes)


def test_scatter_stroke_modes():
    filled = generate_shape_data(500, 500, make_config(stroke_mode="fill"))
    assert not any(s.stroke for s in filled)

    stroked = generate_shape_data(500, 500, make_config(style="memphis", stroke_mode="stroke"))
    for s in stroked:
        assert s.stroke == (s.type not in FILL_ONLY_KINDS)


def test_seasonal_styles_scatter_their_icons():
    for style in ("seasonal-cny", "seasonal-ramadan"):
        shapes = generate_shape_data(500, 500, make_config(style=style, complexity=15))
        assert {s.type for s in shapes} <= set(STYLE_TYPES[style])


# ── Waves ──

def test_waves_band_count_and_points():
    shapes = generate_shape_data(500, 500, make_config(style="waves", complexity=27))
    assert len(shapes) == 5
    assert [s.points for s in shapes] == [0, 1, 2, 3, 4]
    assert [s.y for s in shapes] == [50, 150, 250, 350, 450]
    assert all(s.type == "wave" and s.size == 200 for s in shapes)


# ── Mosaic ──

def test_mosaic_rotations_are_quarter_turns():
    shapes = generate_shape_data(600, 600, make_config(style="mosaic", complexity=64))
    assert shapes
    assert all(s.rotation in QUARTER_TURNS for s in shapes)


def test_mosaic_blocks_do_not_share_centers():
    shapes = generate_shape_data(600, 600, make_config(style="mosaic", complexity=64))
    centers = [(round(s.x, 6), round(s.y, 6)) for s in shapes]
    assert len(centers) == len(set(centers))
    idx = _indices(shapes)
    assert idx == sorted(set(idx))


def test_mosaic_assets_become_images():
    config = make_config(style="mosaic", complexity=16, custom_image=ASSETS)
    shapes = generate_shape_data(400, 400, config)
    assert all(s.type == "image" and s.asset_id in {"a1", "a2"} for s in shapes)


def test_generators_called_directly_share_the_signature():
    config = make_config(style="grid", complexity=9)
    direct = generate_grid(300, 300, 30, config, SeededRandom(config.seed))
    assert direct == generate_shape_data(300, 300, config)
