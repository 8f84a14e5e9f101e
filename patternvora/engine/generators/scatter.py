"""Scatter: independent draws placed by the composition positioner.

Serves every free-form style; the style only picks the shape vocabulary.
"""

from __future__ import annotations

import math

from patternvora.engine.composition import get_position
from patternvora.engine.generators.common import allowed_types, draw_phase, draw_speed, get_stroke_value
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

STYLE_TYPES: dict[str, tuple[str, ...]] = {
    "geometric": ("polygon", "star", "cross", "donut", "circle", "rect", "triangle", "diamond", "hexagon", "thin-ring"),
    "organic": ("blob", "pill", "arc", "circle", "semicircle", "spiral", "squiggle"),
    "bauhaus": ("arc", "circle", "rect", "line", "triangle", "semicircle"),
    "confetti": ("star", "zigzag", "circle", "triangle", "arrow", "squiggle"),
    "memphis": ("circle", "rect", "triangle", "zigzag", "cross", "donut", "pill", "star", "arrow", "squiggle"),
    "typo": ("char",),
    "seasonal-cny": ("lantern", "dragon", "angpao", "cloud-cn", "firecracker", "fan"),
    "seasonal-christmas": ("xmas-tree", "gift", "snowflake", "bell", "candycane", "santa-hat"),
    "seasonal-newyear": ("firework", "champagne", "clock-ny", "balloon", "party-hat", "party-popper", "starburst"),
    "seasonal-valentine": ("heart", "rose", "love-letter", "ring"),
    "seasonal-ramadan": ("crescent", "star-islamic", "mosque", "lantern-ramadan", "ketupat", "dates"),
}
_FALLBACK_TYPES = ("circle",)

TYPO_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


@generator("custom-image", *STYLE_TYPES)
def generate_scatter(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    types = allowed_types(config, STYLE_TYPES.get(config.style, _FALLBACK_TYPES))
    assets = config.custom_image.active_assets
    is_typo = config.style == "typo"

    shapes: list[ShapeData] = []
    for i in range(config.complexity):
        x, y = get_position(config.composition, width, height, rng, config.composition_options)
        asset_id = None
        if assets:
            shape_type = "image"
            asset_id = rng.next_item(assets).id
        else:
            shape_type = rng.next_item(types)

        shapes.append(
            ShapeData(
                index=i,
                type=shape_type,
                x=x,
                y=y,
                size=base_size * rng.next_range(0.5, 2.0),
                rotation=rng.next_range(0, 360),
                color=rng.next_item(config.palette.colors),
                stroke=get_stroke_value(config.stroke_mode, shape_type, rng, 0.6),
                speed_factor=draw_speed(rng),
                phase_offset=draw_phase(rng),
                points=math.floor(rng.next_range(3, 8)),
                seed=rng.next_range(0, 1000),
                char=rng.next_item(TYPO_CHARS) if is_typo else None,
                asset_id=asset_id,
            )
        )
    return shapes
