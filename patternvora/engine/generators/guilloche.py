"""Guilloché: nested hypotrochoid / epitrochoid (spirograph) curves.

Per layer the radii shrink a little. The curve closes after
``r / gcd(R, r)`` revolutions of the rolling circle, computed on the
integer radii before scaling to the canvas.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import GuillocheCurve, ShapeData
from patternvora.utils.geometry import gcd, round_half_up

# Curve extent as a fraction of min(width, height)
_MAX_RADIUS_FRACTION = 0.45
# Radius shrink at the innermost layer
_MAJOR_SHRINK = 0.3
_MINOR_SHRINK = 0.2
_PEN_SHRINK = 0.2
# Samples per revolution, clamped
_SAMPLES_PER_REV = 100
_MIN_SAMPLES = 200
_MAX_SAMPLES = 1000


def hypotrochoid(t: NDArray[np.float64], R: float, r: float, d: float) -> tuple[NDArray, NDArray]:
    """Circle of radius r rolling inside a circle of radius R, pen at distance d."""
    k = (R - r) / r
    return (R - r) * np.cos(t) + d * np.cos(k * t), (R - r) * np.sin(t) - d * np.sin(k * t)


def epitrochoid(t: NDArray[np.float64], R: float, r: float, d: float) -> tuple[NDArray, NDArray]:
    """Circle of radius r rolling outside a circle of radius R, pen at distance d."""
    k = (R + r) / r
    return (R + r) * np.cos(t) - d * np.cos(k * t), (R + r) * np.sin(t) - d * np.sin(k * t)


def closing_revolutions(major: float, minor: float) -> float:
    major_i = round_half_up(major)
    minor_i = round_half_up(minor)
    divisor = gcd(major_i, minor_i)
    if divisor == 0:
        return 0.0
    return minor_i / divisor


def sample_count(revolutions: float) -> int:
    return min(_MAX_SAMPLES, max(_MIN_SAMPLES, round_half_up(revolutions * _SAMPLES_PER_REV)))


@generator("guilloche", self_structured=True)
def generate_guilloche(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    opts = config.guilloche_options
    colors = config.palette.colors
    cx = width / 2
    cy = height / 2

    max_radius = min(width, height) * _MAX_RADIUS_FRACTION
    scale = max_radius / (opts.major_radius + opts.pen_distance)

    shapes: list[ShapeData] = []
    for layer in range(opts.layer_count):
        layer_ratio = layer / max(1, opts.layer_count - 1)
        major = opts.major_radius * (1 - layer_ratio * _MAJOR_SHRINK)
        minor = opts.minor_radius * (1 - layer_ratio * _MINOR_SHRINK)
        R = major * scale
        r = minor * scale
        d = opts.pen_distance * (1 - layer_ratio * _PEN_SHRINK) * scale

        revolutions = closing_revolutions(major, minor)
        max_t = 2 * math.pi * revolutions
        n = sample_count(revolutions)
        t = (np.arange(n + 1, dtype=np.float64) / n) * max_t

        if opts.curve_type == "epitrochoid" or (opts.curve_type == "mixed" and layer % 2 == 1):
            xs, ys = epitrochoid(t, R, r, d)
        else:
            xs, ys = hypotrochoid(t, R, r, d)
        flat = np.column_stack((cx + xs, cy + ys)).ravel()

        phase = layer * (math.pi / opts.layer_count)
        payload = GuillocheCurve(
            points_data=tuple(flat.tolist()),
            revolutions=revolutions,
            stroke_weight=opts.stroke_weight + layer * 0.3,
        )
        shapes.append(
            ShapeData(
                index=layer,
                type="guilloche-curve",
                x=cx,
                y=cy,
                size=max_radius * 2,
                rotation=phase,
                color=colors[layer % len(colors)],
                stroke=True,
                speed_factor=1 + layer * 0.1,
                phase_offset=phase,
                points=len(flat),
                seed=payload.stroke_weight,
                payload=payload,
            )
        )
    return shapes
