"""Layer configuration model: the durable artifact every generation derives from."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from patternvora.models.shape import ShapeOverride

logger = logging.getLogger(__name__)

PatternStyle = Literal[
    "geometric",
    "organic",
    "grid",
    "bauhaus",
    "confetti",
    "custom-image",
    "radial",
    "typo",
    "mosaic",
    "hex",
    "waves",
    "memphis",
    "isometric",
    "seasonal-cny",
    "seasonal-christmas",
    "seasonal-newyear",
    "seasonal-valentine",
    "seasonal-ramadan",
    "truchet",
    "guilloche",
    "herringbone",
]

CompositionType = Literal[
    "random",
    "center",
    "frame",
    "diagonal",
    "thirds",
    "bottom",
    "cross",
    "ring",
    "x-shape",
    "split-v",
    "split-h",
    "corners",
]

StrokeMode = Literal["random", "fill", "stroke"]
SymmetryGroup = Literal["none", "pm", "pmm", "p4m"]
RotationLock = Literal["free", "45deg", "90deg"]
DistributionMode = Literal["scatter", "flow", "cluster", "wave", "spiral"]
ColorDistribution = Literal[
    "random", "gradient-h", "gradient-v", "gradient-radial", "zones", "alternating"
]

# Used whenever a palette arrives without colors.
FALLBACK_COLOR = "#000000"

# Custom asset uploads are capped per layer.
MAX_CUSTOM_ASSETS = 5


class _WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Palette(_WireModel):
    name: str = ""
    colors: list[str] = Field(default_factory=list)
    bg: str = "#ffffff"


class CustomAsset(_WireModel):
    id: str
    src: str = ""
    enabled: bool = True


class CustomImageConfig(_WireModel):
    assets: list[CustomAsset] = Field(default_factory=list, max_length=MAX_CUSTOM_ASSETS)
    original_colors: bool = False
    display_mode: Literal["multiple", "single"] = "multiple"

    @property
    def active_assets(self) -> list[CustomAsset]:
        return [a for a in self.assets if a.enabled]


class StyleOptions(_WireModel):
    # Empty = every default shape for the current style
    shape_types: list[str] = Field(default_factory=list)
    grid_gap: float = 0.0


class CompositionOptions(_WireModel):
    direction: Literal["tl-br", "tr-bl"] = "tl-br"
    margin: float = 25.0


class StructureConfig(_WireModel):
    regularity: float = 0.0
    size_variation: float = 50.0
    rotation_lock: RotationLock = "free"
    distribution_mode: DistributionMode = "scatter"
    min_spacing: float = 0.0
    color_distribution: ColorDistribution = "random"

    @field_validator("regularity", "size_variation", "min_spacing")
    @classmethod
    def _clamp_percent(cls, v: float) -> float:
        return min(100.0, max(0.0, v))


class TruchetOptions(_WireModel):
    maze_density: int = 10
    arc_weight: int = 5
    concentric_count: int = 1
    double_stroke: bool = False


class GuillocheOptions(_WireModel):
    curve_type: Literal["hypotrochoid", "epitrochoid", "mixed"] = "hypotrochoid"
    major_radius: float = Field(default=100.0, gt=0)
    minor_radius: float = Field(default=40.0, gt=0)
    pen_distance: float = Field(default=60.0, ge=0)
    layer_count: int = Field(default=3, ge=0)
    stroke_weight: float = 2.0


class HerringboneOptions(_WireModel):
    pattern: Literal["herringbone", "chevron", "basket-weave"] = "herringbone"
    tile_ratio: float = Field(default=2.5, gt=0)
    grout_size: float = Field(default=2.0, ge=0)
    color_mode: Literal["mono", "alternating", "random"] = "alternating"


class TextConfig(_WireModel):
    enabled: bool = False
    content: str = "PATTERN\nVORA"
    font_family: str = "sans-serif"
    font_size: float = 150.0
    color: str = "#ffffff"
    x: float = 50.0
    y: float = 50.0
    mosaic_density: float = Field(default=1.0, gt=0)
    masking_mode: Literal["none", "mask", "mosaic"] = "none"


def _default_palette() -> Palette:
    from patternvora.palettes import PALETTES

    return PALETTES[0].model_copy(deep=True)


class LayerConfig(_WireModel):
    """Everything one layer's pattern is derived from.

    ``complexity`` and canvas size are not range-checked here: degenerate
    values produce an empty shape sequence at generation time.
    """

    seed: int = 12345
    style: PatternStyle = "geometric"
    composition: CompositionType = "random"
    complexity: int = 50
    scale: float = 1.0
    palette: Palette = Field(default_factory=_default_palette)
    stroke_width: float = 2.0
    stroke_mode: StrokeMode = "random"
    texture: float = 0.0
    custom_image: CustomImageConfig = Field(default_factory=CustomImageConfig)
    style_options: StyleOptions = Field(default_factory=StyleOptions)
    composition_options: CompositionOptions = Field(default_factory=CompositionOptions)
    structure: StructureConfig | None = None
    symmetry_group: SymmetryGroup = "none"
    truchet_options: TruchetOptions = Field(default_factory=TruchetOptions)
    guilloche_options: GuillocheOptions = Field(default_factory=GuillocheOptions)
    herringbone_options: HerringboneOptions = Field(default_factory=HerringboneOptions)
    text: TextConfig = Field(default_factory=TextConfig)
    transparent_background: bool = False
    overrides: dict[int, ShapeOverride] = Field(default_factory=dict)

    @field_validator("palette")
    @classmethod
    def _ensure_palette_colors(cls, v: Palette) -> Palette:
        if not v.colors:
            logger.warning("Palette %r has no colors, falling back to %s", v.name, FALLBACK_COLOR)
            return v.model_copy(update={"colors": [FALLBACK_COLOR]})
        return v

