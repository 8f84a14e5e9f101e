"""Pipeline orchestrator: generation, then the gated structure and symmetry stages."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from patternvora.engine.config import EngineConfig
from patternvora.engine.context import GenerationContext
from patternvora.engine.registry import (
    Stage,
    StyleRegistry,
    TransformRegistry,
    get_registry,
    get_style_registry,
)
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

logger = logging.getLogger(__name__)

_PASS_MODULES = (
    "patternvora.engine.dispatch",
    "patternvora.engine.structure",
    "patternvora.engine.symmetry",
)


def load_modules() -> None:
    """Import every generator and pass module so their decorators fire."""
    package = importlib.import_module("patternvora.engine.generators")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")
    for name in _PASS_MODULES:
        importlib.import_module(name)


class Pipeline:
    """Runs the registered passes stage by stage over one context."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        styles: StyleRegistry | None = None,
    ) -> None:
        load_modules()
        self.registry = registry or get_registry()
        self.styles = styles or get_style_registry()

    def run(self, ctx: GenerationContext) -> GenerationContext:
        """Run every stage the context is eligible for. Pass errors propagate."""
        if ctx.is_degenerate:
            logger.debug(
                "Degenerate input (%sx%s, complexity %s), no shapes",
                ctx.width, ctx.height, ctx.config.complexity,
            )
            ctx.shapes = []
            return ctx

        start = time.perf_counter()
        skipped = self._stage_gate(ctx)
        ordered = [
            spec
            for stage in Stage
            if stage not in skipped
            for spec in self.registry.get_stage(stage)
        ]

        for spec in ordered:
            t0 = time.perf_counter()
            spec.fn(ctx)
            ctx.completed_transforms.append(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms (%d shapes)", spec.id, elapsed, ctx.num_shapes)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: style=%s seed=%s, %d passes, %d shapes in %.0fms",
            ctx.config.style,
            ctx.rng.seed,
            len(ctx.completed_transforms),
            ctx.num_shapes,
            total,
        )
        return ctx

    def run_stage(self, ctx: GenerationContext, stage: Stage) -> GenerationContext:
        """Run only the passes of one stage, ungated."""
        for spec in self.registry.get_stage(stage):
            spec.fn(ctx)
            ctx.completed_transforms.append(spec.id)
        return ctx

    def _stage_gate(self, ctx: GenerationContext) -> set[Stage]:
        """Stages to skip for this layer.

        - No structure config, or a self-structured style: skip STRUCTURE
        - Symmetry group "none": skip SYMMETRY
        """
        skip: set[Stage] = set()
        config = ctx.config
        if config.structure is None or self.styles.get(config.style).self_structured:
            skip.add(Stage.STRUCTURE)
        if config.symmetry_group == "none":
            skip.add(Stage.SYMMETRY)
        return skip


# Singleton
_pipeline: Pipeline | None = None


def create_pipeline() -> Pipeline:
    """Get or create the pipeline over the global registries."""
    global _pipeline
    if _pipeline is None:
        _pipeline = Pipeline()
    return _pipeline


def generate_shape_data(
    width: float,
    height: float,
    config: LayerConfig,
    engine_config: EngineConfig | None = None,
) -> list[ShapeData]:
    """Shape sequence for one layer. Same inputs and non-zero seed, same output."""
    ctx = GenerationContext(
        width=width,
        height=height,
        config=config,
        engine_config=engine_config or EngineConfig(),
    )
    return create_pipeline().run(ctx).shapes
