"""Grid: one candidate shape per cell of a ceil(sqrt(complexity))² lattice."""

from __future__ import annotations

import math

from patternvora.engine.generators.common import allowed_types, draw_phase, draw_speed, get_stroke_value
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

DEFAULT_TYPES = ("rect", "polygon", "cross", "circle", "diamond", "hexagon")

# A cell emits a shape when the draw is <= this; skipped cells still consume an index.
_EMIT_PROBABILITY = 0.8


@generator("grid", self_structured=True)
def generate_grid(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    cols = math.ceil(math.sqrt(config.complexity))
    rows = cols

    gap = config.style_options.grid_gap or 0
    cell_w = (width - (cols - 1) * gap) / cols
    cell_h = (height - (rows - 1) * gap) / rows

    colors = config.palette.colors
    assets = config.custom_image.active_assets
    types = allowed_types(config, DEFAULT_TYPES)

    if assets and config.custom_image.display_mode == "single":
        return [
            ShapeData(
                index=0,
                type="image",
                x=width / 2,
                y=height / 2,
                size=min(width, height) * config.scale * 0.6,
                rotation=0,
                color=rng.next_item(colors),
                stroke=False,
                speed_factor=1,
                phase_offset=0,
                points=0,
                seed=rng.next_range(0, 1000),
                asset_id=rng.next_item(assets).id,
            )
        ]

    shapes: list[ShapeData] = []
    index = 0
    for i in range(cols):
        for j in range(rows):
            if rng.next_float() > _EMIT_PROBABILITY:
                index += 1
                continue

            shapes.append(
                ShapeData(
                    index=index,
                    type="image" if assets else rng.next_item(types),
                    x=i * (cell_w + gap) + cell_w / 2,
                    y=j * (cell_h + gap) + cell_h / 2,
                    size=(min(cell_w, cell_h) * config.scale) * rng.next_range(0.2, 0.8),
                    rotation=rng.next_range(0, 360),
                    color=rng.next_item(colors),
                    # The stroke decision draws its own shape kind
                    stroke=get_stroke_value(
                        config.stroke_mode, "image" if assets else rng.next_item(types), rng
                    ),
                    speed_factor=draw_speed(rng),
                    phase_offset=draw_phase(rng),
                    points=math.floor(rng.next_range(5, 8)),
                    asset_id=rng.next_item(assets).id if assets else None,
                )
            )
            index += 1
    return shapes
