"""Generator and transform registries: populated by decorators at import time.

Usage:
    @generator("grid", self_structured=True)
    def generate_grid(width, height, base_size, config, rng) -> list[ShapeData]:
        ...

    @transform(id="S1.02", stage=Stage.STRUCTURE, dependencies=["S1.01"])
    def normalize(ctx: GenerationContext) -> None:
        ctx.shapes = [...]

Adding a style or a pass = creating one decorated function. Nothing else changes.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from patternvora.engine.context import GenerationContext
    from patternvora.engine.rng import SeededRandom
    from patternvora.models.layer import LayerConfig
    from patternvora.models.shape import ShapeData

    GeneratorFn = Callable[[float, float, float, LayerConfig, SeededRandom], list[ShapeData]]

logger = logging.getLogger(__name__)

# Style rendered when a configuration names a style nobody registered.
FALLBACK_STYLE = "geometric"


class Stage(enum.IntEnum):
    GENERATION = 0
    STRUCTURE = 1
    SYMMETRY = 2


@dataclass
class GeneratorSpec:
    style: str
    fn: "GeneratorFn"
    # Self-structured styles never go through the structure stage
    self_structured: bool = False


@dataclass
class TransformSpec:
    id: str
    stage: Stage
    fn: Callable[["GenerationContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StyleRegistry:
    """Singleton registry of style generators."""

    def __init__(self) -> None:
        self._generators: dict[str, GeneratorSpec] = {}

    def register(self, spec: GeneratorSpec) -> None:
        if spec.style in self._generators:
            raise ValueError(f"Duplicate generator for style: {spec.style}")
        self._generators[spec.style] = spec
        logger.debug("Registered generator %s -> %s", spec.style, spec.fn.__name__)

    def get(self, style: str) -> GeneratorSpec:
        spec = self._generators.get(style)
        if spec is None:
            return self._generators[FALLBACK_STYLE]
        return spec

    def styles(self) -> list[str]:
        return sorted(self._generators)

    def __contains__(self, style: str) -> bool:
        return style in self._generators

    @property
    def count(self) -> int:
        return len(self._generators)


class TransformRegistry:
    """Singleton registry of post-generation passes."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.stage.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_stage(self, stage: Stage) -> list[TransformSpec]:
        """Passes of one stage in dependency order."""
        ids = {tid for tid, s in self._transforms.items() if s.stage == stage}
        return [s for s in self.resolve_order(ids) if s.stage == stage]

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.stage, s.id))

    def _with_dependencies(self, ids: set[str]) -> set[str]:
        found: set[str] = set()
        pending = list(ids)
        while pending:
            tid = pending.pop()
            if tid in found:
                continue
            if tid not in self._transforms:
                raise KeyError(f"Unknown transform: {tid}")
            found.add(tid)
            pending.extend(self._transforms[tid].dependencies)
        return found

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Requested passes plus everything they depend on, in run order.

        Stage first, then dependencies, then ID. A pass may depend on passes
        of its own stage or an earlier one. ``None`` orders every pass.
        """
        wanted = set(self._transforms) if requested_ids is None else self._with_dependencies(requested_ids)

        waiting: dict[str, set[str]] = {}
        for tid in wanted:
            spec = self._transforms[tid]
            for dep in spec.dependencies:
                dep_spec = self._transforms.get(dep)
                if dep_spec is not None and dep_spec.stage > spec.stage:
                    raise ValueError(
                        f"{tid} ({spec.stage.name}) depends on later-stage {dep} ({dep_spec.stage.name})"
                    )
            waiting[tid] = {dep for dep in spec.dependencies if dep in wanted}

        ready = [(self._transforms[tid].stage, tid) for tid, deps in waiting.items() if not deps]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            _, tid = heapq.heappop(ready)
            ordered.append(self._transforms[tid])
            for other, deps in waiting.items():
                if tid in deps:
                    deps.discard(tid)
                    if not deps:
                        heapq.heappush(ready, (self._transforms[other].stage, other))

        if len(ordered) != len(wanted):
            stuck = sorted(tid for tid, deps in waiting.items() if deps)
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singletons
_styles = StyleRegistry()
_transforms = TransformRegistry()


def get_style_registry() -> StyleRegistry:
    return _styles


def get_registry() -> TransformRegistry:
    return _transforms


def generator(*styles: str, self_structured: bool = False):
    """Decorator to register a generator for one or more styles."""

    def decorator(fn: "GeneratorFn"):
        for style in styles:
            _styles.register(
                GeneratorSpec(style=style, fn=fn, self_structured=self_structured)
            )
        return fn

    return decorator


def transform(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a post-generation pass."""

    def decorator(fn: Callable[["GenerationContext"], None]):
        spec = TransformSpec(
            id=id,
            stage=stage,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _transforms.register(spec)
        return fn

    return decorator
