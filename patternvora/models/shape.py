"""Generated shape records and user overrides.

``ShapeData`` is a flat record over every draw-kind. Optional fields are only
meaningful for some kinds:

    points   polygon corner count / wave band index / truchet tile code /
             herringbone ratio code / guilloche point count
    seed     per-shape variation seed / truchet packed options /
             guilloche stroke weight
    char     ``char`` shapes only (typo style)
    asset_id ``image`` shapes only
    payload  typed side-channel for the truchet and guilloche families
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

GEOMETRIC_KINDS = (
    "circle", "rect", "triangle", "arc", "line", "star", "polygon", "blob",
    "zigzag", "cross", "donut", "pill", "diamond", "hexagon", "thin-ring",
    "semicircle", "spiral", "squiggle", "arrow",
)
SEASONAL_KINDS = (
    "lantern", "dragon", "angpao", "cloud-cn", "firecracker", "fan",
    "xmas-tree", "gift", "snowflake", "bell", "candycane", "santa-hat",
    "firework", "champagne", "clock-ny", "balloon", "party-hat", "party-popper",
    "starburst", "heart", "rose", "love-letter", "cupid-arrow", "bow", "ring",
    "crescent", "star-islamic", "mosque", "lantern-ramadan", "ketupat", "dates",
)
GENERATOR_KINDS = ("image", "char", "wave", "cube", "truchet-tile", "guilloche-curve")

SHAPE_KINDS = frozenset(GEOMETRIC_KINDS + SEASONAL_KINDS + GENERATOR_KINDS)

# Kinds the renderer can only fill, never outline.
FILL_ONLY_KINDS = frozenset({"image", "char", "wave", "zigzag", "blob"})


@dataclass(frozen=True)
class TruchetTile:
    tile: Literal["arc-a", "arc-b"]
    arc_weight: int
    concentric_count: int
    double_stroke: bool

    @property
    def tile_code(self) -> int:
        return 1 if self.tile == "arc-a" else 2

    @property
    def packed(self) -> int:
        """doubleStroke (bit 6) + arcWeight * 4 + concentricCount."""
        return (64 if self.double_stroke else 0) + self.arc_weight * 4 + self.concentric_count


@dataclass(frozen=True)
class GuillocheCurve:
    # Flat x0, y0, x1, y1, ... in layer coordinates
    points_data: tuple[float, ...]
    revolutions: float
    stroke_weight: float

    @property
    def point_pairs(self) -> list[tuple[float, float]]:
        pts = self.points_data
        return [(pts[i], pts[i + 1]) for i in range(0, len(pts) - 1, 2)]


ShapePayload = Union[TruchetTile, GuillocheCurve]


@dataclass(frozen=True)
class ShapeData:
    """One generated primitive in layer-local coordinates."""

    index: int
    type: str
    x: float
    y: float
    size: float
    rotation: float
    color: str
    stroke: bool
    speed_factor: float
    phase_offset: float
    points: float | None = None
    seed: float | None = None
    char: str | None = None
    asset_id: str | None = None
    payload: ShapePayload | None = None

    def to_wire(self) -> dict[str, Any]:
        """Renderer record: camelCase keys, unset optionals omitted."""
        out: dict[str, Any] = {
            "index": self.index,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "rotation": self.rotation,
            "color": self.color,
            "stroke": self.stroke,
            "speedFactor": self.speed_factor,
            "phaseOffset": self.phase_offset,
        }
        for key, value in (
            ("points", self.points),
            ("seed", self.seed),
            ("char", self.char),
            ("assetId", self.asset_id),
        ):
            if value is not None:
                out[key] = value
        if isinstance(self.payload, GuillocheCurve):
            out["pointsData"] = list(self.payload.points_data)
        return out


class ShapeOverride(BaseModel):
    """Sparse user edit keyed by ``ShapeData.index``.

    x / y are percentages of the canvas, size is a multiplier of the
    generated size, rotation is absolute degrees.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    x: float | None = None
    y: float | None = None
    size: float | None = None
    rotation: float | None = None
    color: str | None = None
    hidden: bool = False
