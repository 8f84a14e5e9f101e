"""Hex: offset-row hexagon tiling."""

from __future__ import annotations

import math

from patternvora.engine.generators.common import draw_speed, get_stroke_value
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

_EMIT_PROBABILITY = 0.7


@generator("hex", self_structured=True)
def generate_hex(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    if base_size <= 0:
        return []
    size = base_size * 0.6
    hex_h = size * 2
    hex_w = math.sqrt(3) * size
    vert_dist = hex_h * 0.75
    horiz_dist = hex_w
    cols = math.ceil(width / horiz_dist) + 2
    rows = math.ceil(height / vert_dist) + 2

    shapes: list[ShapeData] = []
    index = 0
    for r in range(-1, rows):
        for c in range(-1, cols):
            x_offset = hex_w / 2 if r % 2 != 0 else 0
            cx = c * horiz_dist + x_offset
            cy = r * vert_dist

            if rng.next_float() > _EMIT_PROBABILITY:
                index += 1
                continue

            shapes.append(
                ShapeData(
                    index=index,
                    type="polygon",
                    x=cx,
                    y=cy,
                    size=size * 1.8,
                    rotation=30,
                    color=rng.next_item(config.palette.colors),
                    stroke=get_stroke_value(config.stroke_mode, "polygon", rng),
                    points=6,
                    speed_factor=draw_speed(rng),
                    phase_offset=(c + r) * 0.5,
                )
            )
            index += 1
    return shapes
