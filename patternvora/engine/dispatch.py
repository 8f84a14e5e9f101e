"""G0.01: Style dispatch. Runs the registered generator for ``config.style``."""

from __future__ import annotations

import logging

from patternvora.engine.context import GenerationContext
from patternvora.engine.registry import Stage, get_style_registry, transform

logger = logging.getLogger(__name__)


@transform(
    id="G0.01",
    stage=Stage.GENERATION,
    description="Generate shapes with the layer's style generator",
)
def dispatch_style(ctx: GenerationContext) -> None:
    spec = get_style_registry().get(ctx.config.style)
    if spec.style != ctx.config.style:
        logger.warning("No generator for style %r, using %r", ctx.config.style, spec.style)
    ctx.shapes = spec.fn(ctx.width, ctx.height, ctx.base_size, ctx.config, ctx.rng)
