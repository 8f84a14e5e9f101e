"""Tests for the guilloche curve generator."""

import math

import pytest

from patternvora.engine.generators.guilloche import closing_revolutions, sample_count
from patternvora.engine.pipeline import generate_shape_data
from patternvora.models.shape import GuillocheCurve
from tests.conftest import PALETTE, make_config


def _guilloche(**options):
    return generate_shape_data(400, 400, make_config(style="guilloche", guilloche_options=options))


def test_closing_revolutions():
    assert closing_revolutions(100, 40) == 2
    assert closing_revolutions(96, 36) == 3
    assert closing_revolutions(7, 3) == 3


@pytest.mark.parametrize("revs, expected", [(0.5, 200), (2, 200), (5, 500), (30, 1000)])
def test_sample_count_clamped(revs, expected):
    assert sample_count(revs) == expected


def test_single_layer_closes():
    (shape,) = _guilloche(major_radius=100, minor_radius=40, layer_count=1)
    assert isinstance(shape.payload, GuillocheCurve)
    assert shape.payload.revolutions == 2

    pairs = shape.payload.point_pairs
    assert len(pairs) == 201
    assert shape.points == 402
    assert pairs[0][0] == pytest.approx(pairs[-1][0], abs=1e-6)
    assert pairs[0][1] == pytest.approx(pairs[-1][1], abs=1e-6)


def test_curve_fits_canvas():
    shapes = _guilloche(layer_count=3)
    max_r = 400 * 0.45
    for s in shapes:
        for x, y in s.payload.point_pairs:
            assert math.hypot(x - 200, y - 200) <= max_r + 1e-6


def test_layers_cycle_palette_and_phase():
    shapes = _guilloche(layer_count=5, stroke_weight=2)
    assert [s.index for s in shapes] == list(range(5))
    assert [s.color for s in shapes] == [PALETTE.colors[i % 4] for i in range(5)]
    assert shapes[1].rotation == pytest.approx(math.pi / 5)
    assert shapes[2].speed_factor == pytest.approx(1.2)
    assert shapes[3].seed == pytest.approx(2.9)
    assert all(s.type == "guilloche-curve" and s.size == pytest.approx(360) for s in shapes)


def test_mixed_alternates_curve_families():
    hypo = _guilloche(curve_type="hypotrochoid", layer_count=2)
    mixed = _guilloche(curve_type="mixed", layer_count=2)
    assert mixed[0].payload == hypo[0].payload
    assert mixed[1].payload != hypo[1].payload


def test_zero_layers_is_empty():
    assert _guilloche(layer_count=0) == []


def test_wire_record_carries_points():
    (shape,) = _guilloche(layer_count=1)
    wire = shape.to_wire()
    assert len(wire["pointsData"]) == wire["points"]
