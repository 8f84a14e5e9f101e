"""Herringbone family: herringbone, chevron and basket-weave rectangle tilings.

Tiles are ``rect`` shapes whose long side is ``size * tile_ratio``; the ratio
travels to the renderer as ``points = round(tile_ratio * 10)``. Rotations here
are in radians.
"""

from __future__ import annotations

import math
from typing import Callable

from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import HerringboneOptions, LayerConfig
from patternvora.models.shape import ShapeData
from patternvora.utils.geometry import round_half_up, safe_mod, trunc_mod

ColorPicker = Callable[[int], str]


def _color_picker(opts: HerringboneOptions, colors: list[str], rng: SeededRandom) -> ColorPicker:
    """Color for a tile given its pattern-specific ``key`` (parity or row)."""
    if opts.color_mode == "mono":
        return lambda key: colors[0]
    if opts.color_mode == "alternating":
        return lambda key: colors[safe_mod(key, len(colors))]
    return lambda key: rng.next_item(colors)


def _tile(index: int, x: float, y: float, size: float, rotation: float, color: str, ratio_code: int) -> ShapeData:
    return ShapeData(
        index=index,
        type="rect",
        x=x,
        y=y,
        size=size,
        rotation=rotation,
        color=color,
        stroke=False,
        speed_factor=1,
        phase_offset=0,
        points=ratio_code,
    )


def _herringbone(width, height, tile_w, tile_h, grout, pick, ratio_code) -> list[ShapeData]:
    step_x = tile_h + grout
    step_y = tile_w + grout
    shapes: list[ShapeData] = []
    for row in range(-1, math.ceil(height / step_y) + 1):
        for col in range(-1, math.ceil(width / step_x) + 1):
            is_even = (row + col) % 2 == 0
            x = col * step_x + (0 if is_even else tile_w / 2)
            y = row * step_y + (0 if is_even else tile_w / 2)
            shapes.append(
                _tile(
                    len(shapes),
                    x + tile_h / 2,
                    y + tile_w / 2,
                    tile_w,
                    math.pi / 4 if is_even else -math.pi / 4,
                    pick(0 if is_even else 1),
                    ratio_code,
                )
            )
    return shapes


def _chevron(width, height, tile_w, tile_h, grout, pick, ratio_code) -> list[ShapeData]:
    step_x = tile_w * 2 + grout
    step_y = tile_h / 2 + grout
    shapes: list[ShapeData] = []
    for row in range(-1, math.ceil(height / step_y) + 2):
        for col in range(-1, math.ceil(width / step_x) + 1):
            base_x = col * step_x
            base_y = row * step_y
            # Row -1 shifts left, matching the exported layouts
            offset_x = trunc_mod(row, 2) * (step_x / 2)
            color = pick(row)
            y = base_y + tile_h / 4
            shapes.append(_tile(len(shapes), base_x + offset_x + tile_w / 2, y, tile_w, math.pi / 4, color, ratio_code))
            shapes.append(_tile(len(shapes), base_x + offset_x + tile_w * 1.5, y, tile_w, -math.pi / 4, color, ratio_code))
    return shapes


def _basket_weave(width, height, tile_w, tile_h, grout, pick, ratio_code) -> list[ShapeData]:
    cell = tile_h + grout
    shapes: list[ShapeData] = []
    for row in range(-1, math.ceil(height / cell) + 1):
        for col in range(-1, math.ceil(width / cell) + 1):
            is_horizontal = (row + col) % 2 == 0
            base_x = col * cell
            base_y = row * cell
            color = pick(row + col)
            for i in range(2):
                offset = i * (tile_w + grout / 2)
                if is_horizontal:
                    x, y, rotation = base_x + tile_h / 2, base_y + tile_w / 2 + offset, 0.0
                else:
                    x, y, rotation = base_x + tile_w / 2 + offset, base_y + tile_h / 2, math.pi / 2
                shapes.append(_tile(len(shapes), x, y, tile_w, rotation, color, ratio_code))
    return shapes


_PATTERNS = {
    "herringbone": _herringbone,
    "chevron": _chevron,
    "basket-weave": _basket_weave,
}


@generator("herringbone", self_structured=True)
def generate_herringbone(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    opts = config.herringbone_options
    # Own tile unit: complexity sets how many tiles span the short side
    tile_w = min(width, height) / (config.complexity / 10)
    tile_h = tile_w * opts.tile_ratio
    pick = _color_picker(opts, config.palette.colors, rng)

    layout = _PATTERNS.get(opts.pattern)
    if layout is None:
        return []
    return layout(width, height, tile_w, tile_h, opts.grout_size, pick, round_half_up(opts.tile_ratio * 10))
