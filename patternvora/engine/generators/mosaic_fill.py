"""Mosaic fills: shapes packed inside a text or image silhouette.

Both variants walk a jittered sampling grid over the silhouette's region and
keep the points a ``RasterLookup`` reports as inside, minus a random 15% for
an organic edge. Each call owns a fresh RNG seeded from ``config.seed``.

These are not style generators: the renderer calls them directly when a
layer's text is in mosaic masking mode, or for a silhouette image.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Literal

from PIL import Image

from patternvora.config import settings
from patternvora.engine.generators.common import allowed_types, draw_phase, draw_speed, get_stroke_value
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig, TextConfig
from patternvora.models.shape import ShapeData
from patternvora.utils.raster_lookup import RasterLookup, font_px, image_lookup, render_text_lookup

logger = logging.getLogger(__name__)

FILL_STYLE_TYPES: dict[str, tuple[str, ...]] = {
    "geometric": ("polygon", "circle", "rect", "triangle", "diamond", "hexagon"),
    "organic": ("blob", "circle", "semicircle"),
    "bauhaus": ("arc", "circle", "rect", "triangle", "semicircle"),
    "confetti": ("star", "circle", "triangle"),
    "memphis": ("circle", "rect", "triangle", "cross", "star"),
}
_DEFAULT_FILL_TYPES = ("circle", "rect", "triangle")

# Smallest element, in pixels, regardless of density.
MIN_ELEMENT_SIZE = 8.0
# Share of inside points kept.
_KEEP = 0.85

# Text: element = font_px / 15, step 0.8 of an element, jitter +/-0.3 step.
_TEXT_ELEMENT_DIVISOR = 15
_TEXT_STEP = 0.8
_TEXT_JITTER = 0.6
# Sampled half-width of the text block, in font sizes.
_TEXT_HALF_WIDTH = 4

# Image: element = mean fitted side / 30, step 0.75, jitter +/-0.25 step.
_IMAGE_ELEMENT_DIVISOR = 30
_IMAGE_STEP = 0.75
_IMAGE_JITTER = 0.5


def _fill_types(config: LayerConfig) -> list[str]:
    return allowed_types(config, FILL_STYLE_TYPES.get(config.style, _DEFAULT_FILL_TYPES))


def _jittered_grid(x0: float, y0: float, x1: float, y1: float, step: float, jitter: float, rng: SeededRandom):
    """Yield jittered sample points row by row. Two draws per point."""
    y = y0
    while y < y1:
        x = x0
        while x < x1:
            jx = (rng.next_float() - 0.5) * step * jitter
            jy = (rng.next_float() - 0.5) * step * jitter
            yield x + jx, y + jy
            x += step
        y += step


def generate_mosaic_text_fill(
    width: float,
    height: float,
    config: LayerConfig,
    text: TextConfig | None = None,
    density: float | None = None,
    lookup: RasterLookup | None = None,
) -> list[ShapeData]:
    """Shapes packed inside the layer's text.

    ``text`` and ``density`` default to ``config.text`` and its mosaic density.
    ``lookup`` defaults to the text rendered with Pillow.
    """
    text = text or config.text
    density = density or text.mosaic_density
    if width <= 0 or height <= 0 or not text.content:
        return []

    if lookup is None:
        try:
            lookup = render_text_lookup(width, height, text, settings.text_font_path or None)
        except (OSError, ValueError) as e:
            logger.warning("Text silhouette unavailable, mosaic text fill is empty: %s", e)
            return []

    rng = SeededRandom(config.seed)
    assets = config.custom_image.assets
    types = _fill_types(config)

    size_px = font_px(text, width)
    tx = text.x / 100 * width
    ty = text.y / 100 * height
    total_h = len(text.content.split("\n")) * size_px * 1.2
    element = max(MIN_ELEMENT_SIZE, (size_px / _TEXT_ELEMENT_DIVISOR) / density)
    step = element * _TEXT_STEP

    region = (
        max(0, tx - size_px * _TEXT_HALF_WIDTH),
        max(0, ty - total_h),
        min(width, tx + size_px * _TEXT_HALF_WIDTH),
        min(height, ty + total_h),
    )

    shapes: list[ShapeData] = []
    for x, y in _jittered_grid(*region, step, _TEXT_JITTER, rng):
        if not lookup.inside_and_color(x, y).inside:
            continue
        if rng.next_float() > _KEEP:
            continue

        shape_type = "image" if assets else rng.next_item(types)
        size = element * rng.next_range(0.6, 1.2) * config.scale
        shapes.append(
            ShapeData(
                index=len(shapes),
                type=shape_type,
                x=x,
                y=y,
                size=size,
                rotation=rng.next_range(0, 360),
                color=rng.next_item(config.palette.colors),
                stroke=get_stroke_value(config.stroke_mode, shape_type, rng, 0.7),
                speed_factor=draw_speed(rng, 3),
                phase_offset=draw_phase(rng),
                points=math.floor(rng.next_range(4, 7)),
                seed=rng.next_range(0, 1000),
                asset_id=rng.next_item(assets).id if assets else None,
            )
        )

    logger.debug("Mosaic text fill: %d shapes (step %.1f)", len(shapes), step)
    return shapes


def generate_mosaic_image_fill(
    width: float,
    height: float,
    config: LayerConfig,
    image: str | Path | Image.Image | None = None,
    density: float = 1.0,
    color_mode: Literal["raw", "palette"] = "palette",
    lookup: RasterLookup | None = None,
) -> list[ShapeData]:
    """Shapes packed inside an image silhouette (alpha > 128).

    ``color_mode="raw"`` colors each shape with the pixel under it. Pass
    either ``image`` or a prebuilt ``lookup``.
    """
    if width <= 0 or height <= 0:
        return []
    if density <= 0:
        raise ValueError("density must be positive")

    if lookup is None:
        if image is None:
            raise ValueError("either image or lookup is required")
        try:
            lookup = image_lookup(width, height, image)
        except (OSError, ValueError) as e:
            logger.warning("Image silhouette unavailable, mosaic image fill is empty: %s", e)
            return []

    rng = SeededRandom(config.seed)
    types = _fill_types(config)

    x0, y0, x1, y1 = lookup.bounds
    element = max(MIN_ELEMENT_SIZE, (((x1 - x0) + (y1 - y0)) / 2 / _IMAGE_ELEMENT_DIVISOR) / density)
    step = element * _IMAGE_STEP

    shapes: list[ShapeData] = []
    for x, y in _jittered_grid(x0, y0, x1, y1, step, _IMAGE_JITTER, rng):
        sample = lookup.inside_and_color(x, y)
        if not sample.inside:
            continue
        if rng.next_float() > _KEEP:
            continue

        shape_type = rng.next_item(types)
        size = element * rng.next_range(0.6, 1.2) * config.scale
        if color_mode == "raw" and sample.color is not None:
            color = sample.color
        else:
            color = rng.next_item(config.palette.colors)
        shapes.append(
            ShapeData(
                index=len(shapes),
                type=shape_type,
                x=x,
                y=y,
                size=size,
                rotation=rng.next_range(0, 360),
                color=color,
                stroke=get_stroke_value(config.stroke_mode, shape_type, rng, 0.7),
                speed_factor=draw_speed(rng, 3),
                phase_offset=draw_phase(rng),
                points=math.floor(rng.next_range(4, 7)),
                seed=rng.next_range(0, 1000),
            )
        )

    logger.debug("Mosaic image fill: %d shapes (step %.1f)", len(shapes), step)
    return shapes
