"""Truchet maze: square arc tiles chosen with a neighbor-aware weighted draw.

Each tile joins pairs of cell edges with quarter arcs. A tile's odds of
continuing its left and top neighbors' paths are boosted, but the choice stays
random, so mazes come out mostly (not always) connected.
"""

from __future__ import annotations

import math
from typing import Literal

from patternvora.engine.generators.common import draw_phase
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData, TruchetTile

# arc-a joins N-E and S-W, arc-b joins N-W and E-S
ArcTile = Literal["arc-a", "arc-b"]

MIN_DENSITY = 4
MAX_DENSITY = 20
_BASE_SCORE = 1
_MATCH_BONUS = 10


def _score(left: ArcTile | None, top: ArcTile | None) -> tuple[int, int]:
    arc_a = _BASE_SCORE
    arc_b = _BASE_SCORE
    # Whatever the neighbor is, the opposite orientation continues its path
    for neighbor in (left, top):
        if neighbor == "arc-a":
            arc_b += _MATCH_BONUS
        elif neighbor == "arc-b":
            arc_a += _MATCH_BONUS
    return arc_a, arc_b


@generator("truchet", self_structured=True)
def generate_truchet(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    opts = config.truchet_options
    density = max(MIN_DENSITY, min(MAX_DENSITY, opts.maze_density or 10))

    cell_size = min(width, height) / density
    col_count = math.ceil(width / cell_size)
    row_count = math.ceil(height / cell_size)

    arc_weight = opts.arc_weight or 5
    concentric_count = opts.concentric_count or 1

    grid: list[list[ArcTile]] = []
    shapes: list[ShapeData] = []
    index = 0

    for row in range(row_count):
        grid.append([])
        for col in range(col_count):
            left = grid[row][col - 1] if col > 0 else None
            top = grid[row - 1][col] if row > 0 else None
            arc_a_score, arc_b_score = _score(left, top)

            roll = rng.next_float() * (arc_a_score + arc_b_score)
            tile: ArcTile = "arc-a" if roll < arc_a_score else "arc-b"
            grid[row].append(tile)

            payload = TruchetTile(
                tile=tile,
                arc_weight=arc_weight,
                concentric_count=concentric_count,
                double_stroke=opts.double_stroke,
            )
            shapes.append(
                ShapeData(
                    index=index,
                    type="truchet-tile",
                    x=col * cell_size + cell_size / 2,
                    y=row * cell_size + cell_size / 2,
                    size=cell_size * (config.scale / 1.2),
                    rotation=0,
                    color=rng.next_item(config.palette.colors),
                    stroke=True,
                    speed_factor=1,
                    phase_offset=draw_phase(rng),
                    points=payload.tile_code,
                    seed=payload.packed,
                    payload=payload,
                )
            )
            index += 1
    return shapes
