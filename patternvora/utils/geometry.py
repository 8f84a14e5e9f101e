"""Leaf-node numeric helpers. No engine imports."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy.spatial import cKDTree

if TYPE_CHECKING:
    from patternvora.models.shape import ShapeData


def round_half_up(x: float) -> int:
    """Round .5 away toward +inf (not banker's rounding)."""
    return math.floor(x + 0.5)


def trunc_mod(n: float, m: float) -> float:
    """Remainder carrying the sign of the dividend."""
    return math.fmod(n, m)


def safe_mod(n: int, m: int) -> int:
    """Non-negative remainder, usable as a list index."""
    return ((n % m) + m) % m


def gcd(a: int, b: int) -> int:
    return math.gcd(int(a), int(b))


def angular_distance_deg(a: float, b: float) -> float:
    """Shortest distance between two angles in [0, 360)."""
    diff = abs(a - b)
    return min(diff, 360 - diff)


def get_dimensions(aspect_ratio: str, base_size: int = 2000) -> tuple[int, int]:
    """Canvas (width, height) for a named aspect ratio; the long side is ``base_size``."""
    if aspect_ratio == "16:9":
        return base_size, round_half_up(base_size * 9 / 16)
    if aspect_ratio == "9:16":
        return round_half_up(base_size * 9 / 16), base_size
    if aspect_ratio == "4:5":
        return round_half_up(base_size * 4 / 5), base_size
    if aspect_ratio == "3:4":
        return round_half_up(base_size * 3 / 4), base_size
    return base_size, base_size


def pair_overlaps(shapes: Sequence[ShapeData], spacing_factor: float = 0.0) -> np.ndarray:
    """Overlap depth of every pair closer than their spacing distance.

    A pair (a, b) overlaps by ``(a.size + b.size) / 2 * (1 + spacing_factor) - dist``
    when that is positive.
    """
    if len(shapes) < 2:
        return np.empty(0)

    centers = np.array([(s.x, s.y) for s in shapes], dtype=np.float64)
    sizes = np.array([s.size for s in shapes], dtype=np.float64)
    reach = float(np.max(sizes)) * (1 + spacing_factor)

    tree = cKDTree(centers)
    pairs = tree.query_pairs(r=reach, output_type="ndarray")
    if len(pairs) == 0:
        return np.empty(0)

    i, j = pairs[:, 0], pairs[:, 1]
    dists = np.linalg.norm(centers[i] - centers[j], axis=1)
    min_dists = (sizes[i] + sizes[j]) * 0.5 * (1 + spacing_factor)
    depth = min_dists - dists
    return depth[depth > 0]


def total_overlap(shapes: Sequence[ShapeData], spacing_factor: float = 0.0) -> float:
    """Sum of pairwise overlap depths. 0 = every pair respects its spacing."""
    return float(np.sum(pair_overlaps(shapes, spacing_factor)))
