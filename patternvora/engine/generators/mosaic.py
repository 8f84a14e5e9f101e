"""Mosaic: blocked grid packer mixing 2x2, 2x1, 1x2 and 1x1 blocks."""

from __future__ import annotations

import math

from patternvora.engine.generators.common import allowed_types, draw_phase, draw_speed
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

DEFAULT_TYPES = ("rect", "polygon", "circle", "triangle", "hexagon")

# Block growth thresholds on a single draw: >0.85 2x2, >0.70 2x1, >0.55 1x2.
_BLOCK_2X2 = 0.85
_BLOCK_2X1 = 0.70
_BLOCK_1X2 = 0.55
# 1x1 blocks are dropped when a second draw exceeds this.
_SINGLE_KEEP = 0.75

QUARTER_TURNS = (0, 90, 180, 270)


def _choose_block(
    x: int, y: int, cols: int, rows: int, occupied: set[tuple[int, int]], roll: float
) -> tuple[int, int]:
    if (
        roll > _BLOCK_2X2
        and x < cols - 1
        and y < rows - 1
        and (x + 1, y) not in occupied
        and (x, y + 1) not in occupied
        and (x + 1, y + 1) not in occupied
    ):
        return 2, 2
    if roll > _BLOCK_2X1 and x < cols - 1 and (x + 1, y) not in occupied:
        return 2, 1
    if roll > _BLOCK_1X2 and y < rows - 1 and (x, y + 1) not in occupied:
        return 1, 2
    return 1, 1


@generator("mosaic", self_structured=True)
def generate_mosaic(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    grid_count = max(2, math.ceil(math.sqrt(config.complexity)))
    cols = rows = grid_count

    gap = config.style_options.grid_gap or 0
    cell_w = (width - (cols - 1) * gap) / cols
    cell_h = (height - (rows - 1) * gap) / rows

    # Mosaic draws from every uploaded asset, enabled or not
    assets = config.custom_image.assets
    types = allowed_types(config, DEFAULT_TYPES)
    size_factor = 0.95 if config.scale > 1 else config.scale * 0.9

    occupied: set[tuple[int, int]] = set()
    shapes: list[ShapeData] = []
    index = 0

    for y in range(rows):
        for x in range(cols):
            if (x, y) in occupied:
                continue

            block_w, block_h = _choose_block(x, y, cols, rows, occupied, rng.next_float())
            for bx in range(block_w):
                for by in range(block_h):
                    occupied.add((x + bx, y + by))

            if block_w == 1 and block_h == 1 and rng.next_float() > _SINGLE_KEEP:
                index += 1
                continue

            pixel_w = cell_w * block_w + (block_w - 1) * gap
            pixel_h = cell_h * block_h + (block_h - 1) * gap
            start_x = x * (cell_w + gap)
            start_y = y * (cell_h + gap)

            shapes.append(
                ShapeData(
                    index=index,
                    type="image" if assets else rng.next_item(types),
                    x=start_x + pixel_w / 2,
                    y=start_y + pixel_h / 2,
                    size=min(pixel_w, pixel_h) * size_factor,
                    rotation=rng.next_item(QUARTER_TURNS) if block_w == block_h else 0,
                    color=rng.next_item(config.palette.colors),
                    stroke=False,
                    speed_factor=draw_speed(rng),
                    phase_offset=draw_phase(rng),
                    asset_id=rng.next_item(assets).id if assets else None,
                )
            )
            index += 1
    return shapes
