"""Isometric: diamond-offset cube tiling."""

from __future__ import annotations

import math

from patternvora.engine.generators.common import draw_speed
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

_EMIT_PROBABILITY = 0.8


@generator("isometric", self_structured=True)
def generate_isometric(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    if base_size <= 0:
        return []
    tile_w = base_size * 2
    tile_h = base_size
    cols = math.ceil(width / tile_w) + 2
    rows = math.ceil(height / (tile_h / 2)) + 4

    shapes: list[ShapeData] = []
    index = 0
    for r in range(-2, rows):
        for c in range(-1, cols):
            x_offset = tile_w / 2 if r % 2 != 0 else 0
            cx = c * tile_w + x_offset
            cy = r * (tile_h * 0.5)

            if rng.next_float() > _EMIT_PROBABILITY:
                index += 1
                continue

            shapes.append(
                ShapeData(
                    index=index,
                    type="cube",
                    x=cx,
                    y=cy,
                    size=base_size * 1.05,
                    rotation=0,
                    color=rng.next_item(config.palette.colors),
                    stroke=False,
                    speed_factor=draw_speed(rng),
                    phase_offset=(c + r) * 0.5,
                )
            )
            index += 1
    return shapes
