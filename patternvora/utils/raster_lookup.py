"""Inside/color lookups over a silhouette, consumed by the mosaic fill generators.

A lookup answers one question for a canvas point: is it inside the target
silhouette, and if so what color is there. Lookups are built per call,
queried read-only and then dropped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFont
from shapely.geometry import Point
from shapely.prepared import prep

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from patternvora.models.layer import TextConfig

logger = logging.getLogger(__name__)

# Alpha strictly above this counts as inside.
_ALPHA_THRESHOLD = 128
# Source images are fitted to this fraction of the canvas.
_IMAGE_FIT = 0.8
# Text line advance as a multiple of the font size.
_LINE_HEIGHT = 1.2
# Canvas font sizes are expressed per 1000px of canvas width.
_FONT_REFERENCE_WIDTH = 1000


@dataclass(frozen=True)
class LookupSample:
    inside: bool
    color: str | None = None


class RasterLookup(Protocol):
    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the silhouette in canvas coordinates."""
        ...

    def inside_and_color(self, x: float, y: float) -> LookupSample: ...


class PixelBufferLookup:
    """RGBA buffer mapped onto the canvas by an offset and a uniform scale."""

    def __init__(
        self,
        pixels: NDArray[np.uint8],
        offset_x: float = 0.0,
        offset_y: float = 0.0,
        scale: float = 1.0,
    ) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"expected an (H, W, 4) RGBA buffer, got shape {pixels.shape}")
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.pixels = pixels
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.scale = scale

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        h, w = self.pixels.shape[:2]
        return (
            self.offset_x,
            self.offset_y,
            self.offset_x + w * self.scale,
            self.offset_y + h * self.scale,
        )

    def inside_and_color(self, x: float, y: float) -> LookupSample:
        px = math.floor((x - self.offset_x) / self.scale)
        py = math.floor((y - self.offset_y) / self.scale)
        h, w = self.pixels.shape[:2]
        if px < 0 or px >= w or py < 0 or py >= h:
            return LookupSample(False)

        r, g, b, a = (int(c) for c in self.pixels[py, px])
        if a <= _ALPHA_THRESHOLD:
            return LookupSample(False)
        return LookupSample(True, f"rgb({r},{g},{b})")


class PolygonLookup:
    """Vector silhouette; every inside point reports the same color."""

    def __init__(self, geometry: BaseGeometry, color: str | None = None) -> None:
        self.geometry = geometry
        self.color = color
        self._prepared = prep(geometry)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return tuple(self.geometry.bounds)

    def inside_and_color(self, x: float, y: float) -> LookupSample:
        if self._prepared.contains(Point(x, y)):
            return LookupSample(True, self.color)
        return LookupSample(False)


def font_px(text: TextConfig, width: float) -> float:
    return text.font_size * (width / _FONT_REFERENCE_WIDTH)


def _load_font(size: float, font_path: str | None) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    px = max(1, round(size))
    if font_path:
        return ImageFont.truetype(font_path, px)
    return ImageFont.load_default(size=px)


def render_text_lookup(
    width: float,
    height: float,
    text: TextConfig,
    font_path: str | None = None,
) -> PixelBufferLookup:
    """Rasterize ``text.content`` as a solid silhouette the size of the canvas.

    Lines are centered on (text.x%, text.y%) with a 1.2 line height, the
    block as a whole vertically centered on that point.

    Raises OSError when the font cannot be loaded.
    """
    w = max(1, math.ceil(width))
    h = max(1, math.ceil(height))
    size = font_px(text, width)
    font = _load_font(size, font_path)

    image = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)

    tx = text.x / 100 * width
    ty = text.y / 100 * height
    lines = text.content.split("\n")
    line_height = size * _LINE_HEIGHT
    total_h = len(lines) * line_height
    for i, line in enumerate(lines):
        line_y = ty + i * line_height - total_h / 2 + line_height / 2
        draw.text((tx, line_y), line, fill=(0, 0, 0, 255), font=font, anchor="mm")

    return PixelBufferLookup(np.asarray(image, dtype=np.uint8))


def image_lookup(width: float, height: float, source: str | Path | Image.Image) -> PixelBufferLookup:
    """Fit ``source`` into 80% of the canvas, centered.

    Raises OSError when the file cannot be read or decoded, ValueError
    when it has no pixels.
    """
    image = source if isinstance(source, Image.Image) else Image.open(source)
    pixels = np.asarray(image.convert("RGBA"), dtype=np.uint8)

    img_h, img_w = pixels.shape[:2]
    if img_w == 0 or img_h == 0:
        raise ValueError(f"image has no pixels ({img_w}x{img_h})")
    scale = min(width / img_w, height / img_h) * _IMAGE_FIT
    offset_x = (width - img_w * scale) / 2
    offset_y = (height - img_h * scale) / 2
    logger.debug("Fitted %dx%d image at scale %.3f", img_w, img_h, scale)
    return PixelBufferLookup(pixels, offset_x=offset_x, offset_y=offset_y, scale=scale)
