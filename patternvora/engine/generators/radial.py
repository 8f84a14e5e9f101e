"""Radial burst: concentric rings of evenly spaced items."""

from __future__ import annotations

import math

from patternvora.engine.generators.common import allowed_types, draw_phase, draw_speed, get_stroke_value
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

DEFAULT_TYPES = ("arc", "donut", "star", "circle", "polygon", "spiral", "semicircle", "thin-ring")

_EMIT_PROBABILITY = 0.8
# Angular phase shift added per ring, radians
_RING_TWIST = 0.2


@generator("radial")
def generate_radial(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    cx = width / 2
    cy = height / 2
    max_dist = math.sqrt(width * width + height * height) / 2
    rings = config.complexity // 10 + 2
    types = allowed_types(config, DEFAULT_TYPES)

    shapes: list[ShapeData] = []
    index = 0
    for r in range(rings):
        radius = (r / rings) * max_dist
        items_in_ring = r * 3 + 4

        for i in range(items_in_ring):
            if rng.next_float() > _EMIT_PROBABILITY:
                index += 1
                continue
            angle = (i / items_in_ring) * math.pi * 2 + (r * _RING_TWIST)
            shapes.append(
                ShapeData(
                    index=index,
                    type=rng.next_item(types),
                    x=cx + math.cos(angle) * radius,
                    y=cy + math.sin(angle) * radius,
                    size=base_size * rng.next_range(0.5, 1.5) * (1 + r / rings),
                    rotation=(angle * 180 / math.pi) + 90,
                    color=rng.next_item(config.palette.colors),
                    stroke=get_stroke_value(config.stroke_mode, rng.next_item(types), rng, 0.6),
                    speed_factor=draw_speed(rng),
                    phase_offset=draw_phase(rng),
                )
            )
            index += 1
    return shapes
