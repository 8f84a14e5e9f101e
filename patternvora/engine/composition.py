"""Composition positioner: named layout strategies mapped to sample points."""

from __future__ import annotations

import math

from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import CompositionOptions

# Gaussian spread for "center", as a fraction of each axis.
_CENTER_SPREAD = 0.2
# Rule-of-thirds intersections and their jitter.
_THIRDS = (0.33, 0.66)
_THIRDS_SPREAD = 0.15
# Half-thickness of each "cross" band (40% total).
_CROSS_HALF_THICKNESS = 0.2
_X_SHAPE_SPREAD = 0.15
# Ring radius band, fraction of min(width, height).
_RING_MIN = 0.25
_RING_MAX = 0.45
_CORNER_FRACTION = 0.25
_DEFAULT_MARGIN_PCT = 25


def get_position(
    strategy: str,
    width: float,
    height: float,
    rng: SeededRandom,
    options: CompositionOptions,
) -> tuple[float, float]:
    """Sample one (x, y) for ``strategy``. Unknown strategies sample uniformly."""
    if strategy == "center":
        u = 0.0
        v = 0.0
        while u == 0:
            u = rng.next_float()
        while v == 0:
            v = rng.next_float()
        mag = math.sqrt(-2.0 * math.log(u))
        z1 = mag * math.cos(2.0 * math.pi * v)
        z2 = mag * math.sin(2.0 * math.pi * v)
        return width * (0.5 + z1 * _CENTER_SPREAD), height * (0.5 + z2 * _CENTER_SPREAD)

    if strategy == "frame":
        # A margin of 0 means "unset" and falls back to the default band
        margin_pct = (options.margin or _DEFAULT_MARGIN_PCT) / 100
        margin_x = width * margin_pct
        margin_y = height * margin_pct
        side = math.floor(rng.next_float() * 4)
        if side == 0:
            return rng.next_range(0, width), rng.next_range(0, margin_y)
        if side == 1:
            return rng.next_range(width - margin_x, width), rng.next_range(0, height)
        if side == 2:
            return rng.next_range(0, width), rng.next_range(height - margin_y, height)
        return rng.next_range(0, margin_x), rng.next_range(0, height)

    if strategy == "diagonal":
        x = rng.next_range(0, width)
        if options.direction == "tr-bl":
            ideal_y = height - (x * (height / width))
        else:
            ideal_y = x * (height / width)
        noise = (rng.next_float() - 0.5) * height * 0.5
        return x, ideal_y + noise

    if strategy == "thirds":
        x_region = _THIRDS[0] if rng.next_float() > 0.5 else _THIRDS[1]
        y_region = _THIRDS[0] if rng.next_float() > 0.5 else _THIRDS[1]
        x = width * (x_region + (rng.next_float() - 0.5) * _THIRDS_SPREAD * 2)
        y = height * (y_region + (rng.next_float() - 0.5) * _THIRDS_SPREAD * 2)
        return x, y

    if strategy == "bottom":
        x = rng.next_range(0, width)
        bias = rng.next_float() ** 0.5
        return x, height * bias

    if strategy == "cross":
        if rng.next_float() > 0.5:
            x = rng.next_range(0, width)
            mid_y = height / 2
            y = rng.next_range(mid_y - height * _CROSS_HALF_THICKNESS, mid_y + height * _CROSS_HALF_THICKNESS)
            return x, y
        y = rng.next_range(0, height)
        mid_x = width / 2
        x = rng.next_range(mid_x - width * _CROSS_HALF_THICKNESS, mid_x + width * _CROSS_HALF_THICKNESS)
        return x, y

    if strategy == "x-shape":
        is_main_diagonal = rng.next_float() > 0.5
        t = rng.next_float()
        if is_main_diagonal:
            x = width * (t + (rng.next_float() - 0.5) * _X_SHAPE_SPREAD)
        else:
            x = width * (1 - t + (rng.next_float() - 0.5) * _X_SHAPE_SPREAD)
        y = height * (t + (rng.next_float() - 0.5) * _X_SHAPE_SPREAD)
        return x, y

    if strategy == "ring":
        cx = width / 2
        cy = height / 2
        min_radius = min(width, height) * _RING_MIN
        max_radius = min(width, height) * _RING_MAX
        angle = rng.next_float() * math.pi * 2
        r = rng.next_range(min_radius, max_radius)
        return cx + math.cos(angle) * r, cy + math.sin(angle) * r

    if strategy == "split-v":
        return rng.next_range(width * 0.5, width), rng.next_range(0, height)

    if strategy == "split-h":
        return rng.next_range(0, width), rng.next_range(height * 0.5, height)

    if strategy == "corners":
        corner = math.floor(rng.next_float() * 4)
        margin = min(width, height) * _CORNER_FRACTION
        if corner == 0:
            return rng.next_range(0, margin), rng.next_range(0, margin)
        if corner == 1:
            return rng.next_range(width - margin, width), rng.next_range(0, margin)
        if corner == 2:
            return rng.next_range(width - margin, width), rng.next_range(height - margin, height)
        return rng.next_range(0, margin), rng.next_range(height - margin, height)

    return rng.next_range(0, width), rng.next_range(0, height)
