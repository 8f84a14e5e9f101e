"""Tests for the hit tester."""

import pytest

from patternvora.engine.hit_test import get_shape_at_position, shape_contains
from patternvora.engine.pipeline import generate_shape_data
from patternvora.models.shape import ShapeData, ShapeOverride
from patternvora.models.state import AppState, Layer
from tests.conftest import make_config

W = H = 800


def _state(*layers):
    return AppState(layers=list(layers))


def _layer(layer_id, **fields):
    config_fields = {"complexity": 15, **fields.pop("config", {})}
    return Layer(id=layer_id, config=make_config(**config_fields), **fields)


def _shape(kind, x, y, size):
    return ShapeData(index=0, type=kind, x=x, y=y, size=size, rotation=0, color="#000",
                     stroke=False, speed_factor=1, phase_offset=0)


def test_circle_radius_has_floor():
    tiny = _shape("circle", 100, 100, 1)
    assert shape_contains(tiny, 119, 100)
    assert not shape_contains(tiny, 121, 100)


def test_wave_band_spans_width():
    wave = _shape("wave", 0, 300, 10)
    assert shape_contains(wave, 790, 315)
    assert not shape_contains(wave, 790, 325)


def test_cube_footprint():
    cube = _shape("cube", 0, 0, 50)
    assert shape_contains(cube, 45, 30)
    assert not shape_contains(cube, 45, 40)


def test_top_most_shape_of_top_layer_wins():
    bottom = _layer("bottom", config={"seed": 111})
    top = _layer("top", config={"seed": 222})
    last = generate_shape_data(W, H, top.config)[-1]

    hit = get_shape_at_position(last.x, last.y, W, H, _state(bottom, top))
    assert hit is not None
    assert hit.layer_id == "top"
    assert hit.shape == last
    assert hit.to_wire()["layerId"] == "top"


@pytest.mark.parametrize("flags", [{"visible": False}, {"locked": True}])
def test_hidden_and_locked_layers_are_skipped(flags):
    layer = _layer("only", **flags)
    last = generate_shape_data(W, H, layer.config)[-1]
    assert get_shape_at_position(last.x, last.y, W, H, _state(layer)) is None


def test_miss_returns_none():
    assert get_shape_at_position(-10_000, -10_000, W, H, _state(_layer("a"))) is None


def test_hidden_override_skips_shape():
    layer = _layer("a")
    last = generate_shape_data(W, H, layer.config)[-1]
    layer.config.overrides[last.index] = ShapeOverride(hidden=True)
    hit = get_shape_at_position(last.x, last.y, W, H, _state(layer))
    assert hit is None or hit.shape.index != last.index


def test_moved_override_moves_hit_area():
    layer = _layer("a")
    last = generate_shape_data(W, H, layer.config)[-1]
    layer.config.overrides[last.index] = ShapeOverride(x=-50, y=-50)
    hit = get_shape_at_position(-400, -400, W, H, _state(layer))
    assert hit is not None
    assert hit.shape.index == last.index
    # Generated record is returned, not the overridden one
    assert (hit.shape.x, hit.shape.y) == (last.x, last.y)
