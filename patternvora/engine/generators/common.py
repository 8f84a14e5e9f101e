"""Helpers shared by the style generators."""

from __future__ import annotations

import math
from typing import Sequence

from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import FILL_ONLY_KINDS


def get_stroke_value(
    stroke_mode: str,
    shape_type: str,
    rng: SeededRandom,
    random_threshold: float = 0.7,
) -> bool:
    """Outline or fill. Only the ``random`` mode consumes a draw."""
    if shape_type in FILL_ONLY_KINDS:
        return False
    if stroke_mode == "fill":
        return False
    if stroke_mode == "stroke":
        return True
    return rng.next_float() > random_threshold


def allowed_types(config: LayerConfig, defaults: Sequence[str]) -> list[str]:
    """User-selected shape kinds replace the style defaults wholesale."""
    if config.style_options.shape_types:
        return list(config.style_options.shape_types)
    return list(defaults)


def draw_speed(rng: SeededRandom, hi: float = 4) -> int:
    return math.floor(rng.next_range(1, hi))


def draw_phase(rng: SeededRandom) -> float:
    return rng.next_float() * math.pi * 2
