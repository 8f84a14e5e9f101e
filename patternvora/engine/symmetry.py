"""Wallpaper-style symmetry: mirrored and rotated copies about the canvas center.

    pm   original + X mirror                      (2x)
    pmm  original + X, Y and XY mirrors           (4x)
    p4m  rotations 0/90/180/270, each + X mirror  (8x)

The result is re-indexed 0..n-1 so override keys stay unique.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from patternvora.engine.context import GenerationContext
from patternvora.engine.registry import Stage, transform
from patternvora.models.shape import ShapeData

COPIES = {"none": 1, "pm": 2, "pmm": 4, "p4m": 8}

_P4M_ANGLES = (0.0, math.pi / 2, math.pi, math.pi * 1.5)


def mirror_x(shapes: Sequence[ShapeData], cx: float) -> list[ShapeData]:
    return [replace(s, x=2 * cx - s.x, rotation=-s.rotation) for s in shapes]


def mirror_y(shapes: Sequence[ShapeData], cy: float) -> list[ShapeData]:
    return [replace(s, y=2 * cy - s.y, rotation=math.pi - s.rotation) for s in shapes]


def mirror_xy(shapes: Sequence[ShapeData], cx: float, cy: float) -> list[ShapeData]:
    return [replace(s, x=2 * cx - s.x, y=2 * cy - s.y, rotation=s.rotation + math.pi) for s in shapes]


def rotate_shapes(shapes: Sequence[ShapeData], angle: float, cx: float, cy: float) -> list[ShapeData]:
    cos = math.cos(angle)
    sin = math.sin(angle)
    out = []
    for s in shapes:
        dx = s.x - cx
        dy = s.y - cy
        out.append(
            replace(
                s,
                x=cx + dx * cos - dy * sin,
                y=cy + dx * sin + dy * cos,
                rotation=s.rotation + angle,
            )
        )
    return out


def apply_symmetry(shapes: Sequence[ShapeData], group: str, width: float, height: float) -> list[ShapeData]:
    if group not in COPIES:
        raise ValueError(f"Unknown symmetry group: {group}")
    if group == "none" or not shapes:
        return list(shapes)

    cx = width / 2
    cy = height / 2
    result: list[ShapeData] = []

    if group == "pm":
        result += shapes
        result += mirror_x(shapes, cx)
    elif group == "pmm":
        result += shapes
        result += mirror_x(shapes, cx)
        result += mirror_y(shapes, cy)
        result += mirror_xy(shapes, cx, cy)
    else:
        for angle in _P4M_ANGLES:
            rotated = list(shapes) if angle == 0 else rotate_shapes(shapes, angle, cx, cy)
            result += rotated
            result += mirror_x(rotated, cx)

    return [replace(s, index=i) for i, s in enumerate(result)]


@transform(
    id="S2.01",
    stage=Stage.SYMMETRY,
    description="Replicate shapes under the layer's symmetry group",
)
def symmetry_pass(ctx: GenerationContext) -> None:
    ctx.shapes = apply_symmetry(ctx.shapes, ctx.config.symmetry_group, ctx.width, ctx.height)
