"""PatternVora: seeded procedural generator for decorative vector patterns."""

from patternvora.engine.pipeline import generate_shape_data
from patternvora.engine.hit_test import get_shape_at_position
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData, ShapeOverride

__all__ = [
    "generate_shape_data",
    "get_shape_at_position",
    "LayerConfig",
    "ShapeData",
    "ShapeOverride",
]
