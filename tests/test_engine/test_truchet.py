"""Tests for the truchet maze generator."""

import pytest

from patternvora.engine.generators.truchet import _score
from patternvora.engine.pipeline import generate_shape_data
from patternvora.models.shape import TruchetTile
from tests.conftest import make_config


def _truchet(width=500, height=500, **options):
    return generate_shape_data(width, height, make_config(style="truchet", truchet_options=options))


def test_density_10_gives_100_tiles_of_50px():
    shapes = _truchet(maze_density=10)
    assert len(shapes) == 100
    assert [s.index for s in shapes] == list(range(100))
    xs = sorted({s.x for s in shapes})
    assert xs == [25 + 50 * k for k in range(10)]
    assert all(s.size == pytest.approx(50 / 1.2) for s in shapes)


@pytest.mark.parametrize("density, expected", [(1, 16), (50, 400)])
def test_density_is_clamped(density, expected):
    assert len(_truchet(maze_density=density)) == expected


def test_non_square_canvas_uses_square_cells():
    shapes = _truchet(width=600, height=300, maze_density=10)
    # cell = 30 -> 20 x 10
    assert len(shapes) == 200


def test_tile_codes_and_packed_options():
    shapes = _truchet(maze_density=8, arc_weight=3, concentric_count=2, double_stroke=True)
    for s in shapes:
        assert s.type == "truchet-tile"
        assert s.stroke is True
        assert s.points in (1, 2)
        assert s.seed == 64 + 3 * 4 + 2
        assert isinstance(s.payload, TruchetTile)
        assert s.payload.tile_code == s.points


def test_zero_options_fall_back_to_defaults():
    shapes = _truchet(maze_density=0, arc_weight=0, concentric_count=0)
    assert len(shapes) == 100
    assert all(s.seed == 5 * 4 + 1 for s in shapes)


def test_neighbor_scores():
    assert _score(None, None) == (1, 1)
    assert _score("arc-a", None) == (1, 11)
    assert _score("arc-a", "arc-a") == (1, 21)
    assert _score("arc-a", "arc-b") == (11, 11)
    assert _score("arc-b", "arc-b") == (21, 1)


def test_mostly_continues_neighbor_paths():
    shapes = _truchet(maze_density=20)
    tiles = [s.payload.tile for s in shapes]
    grid = [tiles[r * 20:(r + 1) * 20] for r in range(20)]
    flips = sum(grid[r][c] != grid[r][c - 1] for r in range(20) for c in range(1, 20))
    assert flips / (20 * 19) > 0.6


def test_truchet_ignores_structure():
    plain = generate_shape_data(400, 400, make_config(style="truchet"))
    structured = generate_shape_data(
        400, 400, make_config(style="truchet", structure={"regularity": 100, "min_spacing": 50})
    )
    assert plain == structured
