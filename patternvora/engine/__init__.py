"""PatternVora shape generation engine."""

from patternvora.engine.registry import Stage, generator, get_registry, get_style_registry, transform
from patternvora.engine.context import GenerationContext
from patternvora.engine.pipeline import Pipeline

__all__ = [
    "generator",
    "transform",
    "Stage",
    "get_registry",
    "get_style_registry",
    "GenerationContext",
    "Pipeline",
]
