"""User overrides, resolved against the canvas at render / hit-test time.

Generator output is never modified in place; every function returns new
records.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Sequence

from patternvora.models.shape import ShapeData, ShapeOverride


def apply_override(
    shape: ShapeData, override: ShapeOverride | None, width: float, height: float
) -> ShapeData:
    """``shape`` as the user sees it: x/y from percentages, size as a multiplier."""
    if override is None:
        return shape
    changes: dict = {}
    if override.x is not None:
        changes["x"] = override.x / 100 * width
    if override.y is not None:
        changes["y"] = override.y / 100 * height
    if override.size is not None:
        changes["size"] = shape.size * override.size
    if override.rotation is not None:
        changes["rotation"] = override.rotation
    if override.color is not None:
        changes["color"] = override.color
    return replace(shape, **changes) if changes else shape


def apply_overrides(
    shapes: Sequence[ShapeData],
    overrides: Mapping[int, ShapeOverride],
    width: float,
    height: float,
) -> list[ShapeData]:
    """Visible shapes with their overrides applied; hidden ones are dropped."""
    out = []
    for shape in shapes:
        override = overrides.get(shape.index)
        if override is not None and override.hidden:
            continue
        out.append(apply_override(shape, override, width, height))
    return out
