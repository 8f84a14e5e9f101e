"""Structure post-processor: regularity, size, rotation, color and spacing controls.

Runs after free-form generators (never after self-structured ones) when the
layer carries a ``StructureConfig``. The pure functions below each take and
return a shape list; the decorated passes wire them into the pipeline:

    S1.01  distribution remap
    S1.02  regularity / size variation / rotation lock
    S1.03  color distribution (the only pass that draws from the RNG)
    S1.04  minimum-spacing relaxation
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Sequence

from patternvora.engine.config import EngineConfig
from patternvora.engine.context import GenerationContext
from patternvora.engine.registry import Stage, transform
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import FALLBACK_COLOR, LayerConfig, StructureConfig
from patternvora.models.shape import ShapeData
from patternvora.utils.geometry import angular_distance_deg, round_half_up, total_overlap

logger = logging.getLogger(__name__)

# Share of the original position kept by each distribution mode.
_FLOW_KEEP = 0.3
_WAVE_KEEP = 0.4
_SPIRAL_KEEP = 0.2
_CLUSTER_STRENGTH = 0.6
_FLOW_AMPLITUDE = 0.3
_WAVE_BANDS = 4
_WAVE_AMPLITUDE = 0.1
_SPIRAL_TURNS = 3
_SPIRAL_EXTENT = 0.45
# Regularity lattices never go coarser than this many cells per axis.
_MIN_GRID_CELLS = 8

LOCK_ANGLES: dict[str, tuple[int, ...]] = {
    "90deg": (0, 90, 180, 270),
    "45deg": (0, 45, 90, 135, 180, 225, 270, 315),
}


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------

def apply_distribution_mode(
    shapes: Sequence[ShapeData], mode: str, width: float, height: float
) -> list[ShapeData]:
    """Blend every position toward a mode-specific target. ``scatter`` is identity."""
    if mode == "scatter":
        return list(shapes)

    cx = width / 2
    cy = height / 2
    last = max(1, len(shapes) - 1)
    out: list[ShapeData] = []

    for i, s in enumerate(shapes):
        t = i / last
        x, y = s.x, s.y
        if mode == "flow":
            fx = t * width
            fy = cy + math.sin(t * math.pi * 3) * (height * _FLOW_AMPLITUDE)
            x = s.x * _FLOW_KEEP + fx * (1 - _FLOW_KEEP)
            y = s.y * _FLOW_KEEP + fy * (1 - _FLOW_KEEP)
        elif mode == "cluster":
            dist = math.hypot(s.x - cx, s.y - cy)
            max_dist = math.hypot(cx, cy)
            factor = 1 - (dist / max_dist) * _CLUSTER_STRENGTH
            x = cx + (s.x - cx) * factor
            y = cy + (s.y - cy) * factor
        elif mode == "wave":
            band_y = (i % _WAVE_BANDS) / _WAVE_BANDS * height
            offset = math.sin(t * math.pi * 2) * (height * _WAVE_AMPLITUDE)
            y = s.y * _WAVE_KEEP + (band_y + offset) * (1 - _WAVE_KEEP)
        elif mode == "spiral":
            angle = t * math.pi * 2 * _SPIRAL_TURNS
            radius = t * min(width, height) * _SPIRAL_EXTENT
            x = s.x * _SPIRAL_KEEP + (cx + math.cos(angle) * radius) * (1 - _SPIRAL_KEEP)
            y = s.y * _SPIRAL_KEEP + (cy + math.sin(angle) * radius) * (1 - _SPIRAL_KEEP)
        out.append(replace(s, x=x, y=y))
    return out


# ---------------------------------------------------------------------------
# Per-shape normalization
# ---------------------------------------------------------------------------

def apply_regularity(pos: float, canvas_size: float, regularity: float, grid_size: float = 10.0) -> float:
    """Lerp ``pos`` toward its lattice point. 0 keeps it, 100 snaps fully."""
    if regularity == 0:
        return pos
    cell = canvas_size / max(_MIN_GRID_CELLS, grid_size)
    grid_pos = round_half_up(pos / cell) * cell + cell / 2
    t = regularity / 100
    return pos * (1 - t) + grid_pos * t


def apply_size_variation(size: float, scale: float, size_variation: float, reference: float = 30.0) -> float:
    """Lerp between a uniform ``scale * reference`` size (0) and the original (100)."""
    if size_variation >= 100:
        return size
    t = size_variation / 100
    return scale * reference * (1 - t) + size * t


def find_closest_angle(normalized: float, angles: Sequence[float]) -> float:
    closest = 0
    min_diff = 360.0
    for angle in angles:
        diff = angular_distance_deg(normalized, angle)
        if diff < min_diff:
            min_diff = diff
            closest = angle
    return closest


def apply_rotation_lock(rotation: float, lock: str) -> float:
    angles = LOCK_ANGLES.get(lock)
    if angles is None:
        return rotation
    normalized = math.fmod(rotation, 360)
    if normalized < 0:
        normalized += 360
    return find_closest_angle(normalized, angles)


def normalize_shapes(
    shapes: Sequence[ShapeData],
    structure: StructureConfig,
    scale: float,
    width: float,
    height: float,
    engine_config: EngineConfig | None = None,
) -> list[ShapeData]:
    ec = engine_config or EngineConfig()
    return [
        replace(
            s,
            x=apply_regularity(s.x, width, structure.regularity, ec.regularity_grid_size),
            y=apply_regularity(s.y, height, structure.regularity, ec.regularity_grid_size),
            size=apply_size_variation(s.size, scale, structure.size_variation, ec.reference_size_per_scale),
            rotation=apply_rotation_lock(s.rotation, structure.rotation_lock),
        )
        for s in shapes
    ]


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

def pick_distributed_color(
    palette: Sequence[str],
    index: int,
    x: float,
    y: float,
    width: float,
    height: float,
    mode: str,
    rng: SeededRandom,
) -> str:
    """Color for one shape. ``random`` (or a one-color palette) consumes a draw."""
    n = len(palette)
    if n == 0:
        return FALLBACK_COLOR
    if n == 1 or mode == "random":
        return rng.next_item(palette)

    if mode == "gradient-h":
        color_index = math.floor(x / width * n)
    elif mode == "gradient-v":
        color_index = math.floor(y / height * n)
    elif mode == "gradient-radial":
        cx, cy = width / 2, height / 2
        color_index = math.floor(math.hypot(x - cx, y - cy) / math.hypot(cx, cy) * n)
    elif mode == "zones":
        cols = math.ceil(math.sqrt(n))
        rows = math.ceil(n / cols)
        col = math.floor(x / width * cols)
        row = math.floor(y / height * rows)
        color_index = math.fmod(row * cols + col, n)
    elif mode == "alternating":
        color_index = index % n
    else:
        return rng.next_item(palette)

    # Shapes pushed off-canvas map to the nearest end of the palette
    return palette[int(min(max(color_index, 0), n - 1))]


def apply_color_distribution(
    shapes: Sequence[ShapeData],
    palette: Sequence[str],
    mode: str,
    width: float,
    height: float,
    rng: SeededRandom,
) -> list[ShapeData]:
    return [
        replace(s, color=pick_distributed_color(palette, i, s.x, s.y, width, height, mode, rng))
        for i, s in enumerate(shapes)
    ]


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------

def apply_min_spacing(
    shapes: Sequence[ShapeData],
    min_spacing: float,
    width: float,
    height: float,
    passes: int = 3,
) -> list[ShapeData]:
    """Pairwise repulsion, each pair pushed apart by half its overlap.

    Pairs are visited in index order and every push is seen by the next pair,
    so the result depends on that order. Coincident centers are left alone.
    """
    factor = min_spacing / 100
    xs = [s.x for s in shapes]
    ys = [s.y for s in shapes]
    sizes = [s.size for s in shapes]
    n = len(shapes)

    for _ in range(passes):
        for i in range(n):
            for j in range(i + 1, n):
                dx = xs[j] - xs[i]
                dy = ys[j] - ys[i]
                dist = math.sqrt(dx * dx + dy * dy)
                min_dist = (sizes[i] + sizes[j]) * 0.5 * (1 + factor)
                if not 0 < dist < min_dist:
                    continue
                push = (min_dist - dist) * 0.5
                px = dx / dist * push
                py = dy / dist * push
                xs[i] = max(0, min(width, xs[i] - px))
                ys[i] = max(0, min(height, ys[i] - py))
                xs[j] = max(0, min(width, xs[j] + px))
                ys[j] = max(0, min(height, ys[j] + py))

    return [replace(s, x=xs[k], y=ys[k]) for k, s in enumerate(shapes)]


def apply_structure_controls(
    shapes: Sequence[ShapeData],
    config: LayerConfig,
    width: float,
    height: float,
    rng: SeededRandom,
    engine_config: EngineConfig | None = None,
) -> list[ShapeData]:
    """All four passes in order, outside the pipeline. No structure = identity."""
    structure = config.structure
    if structure is None:
        return list(shapes)
    ec = engine_config or EngineConfig()

    out = apply_distribution_mode(shapes, structure.distribution_mode, width, height)
    out = normalize_shapes(out, structure, config.scale, width, height, ec)
    out = apply_color_distribution(
        out, config.palette.colors, structure.color_distribution, width, height, rng
    )
    if structure.min_spacing > 0:
        out = apply_min_spacing(out, structure.min_spacing, width, height, ec.spacing_passes)
    return out


# ---------------------------------------------------------------------------
# Pipeline passes
# ---------------------------------------------------------------------------

@transform(
    id="S1.01",
    stage=Stage.STRUCTURE,
    description="Remap positions by distribution mode",
)
def distribution_pass(ctx: GenerationContext) -> None:
    ctx.shapes = apply_distribution_mode(
        ctx.shapes, ctx.config.structure.distribution_mode, ctx.width, ctx.height
    )


@transform(
    id="S1.02",
    stage=Stage.STRUCTURE,
    dependencies=["S1.01"],
    description="Regularity, size variation and rotation lock",
)
def normalization_pass(ctx: GenerationContext) -> None:
    ctx.shapes = normalize_shapes(
        ctx.shapes, ctx.config.structure, ctx.config.scale, ctx.width, ctx.height, ctx.engine_config
    )


@transform(
    id="S1.03",
    stage=Stage.STRUCTURE,
    dependencies=["S1.02"],
    description="Assign colors by distribution mode",
)
def color_pass(ctx: GenerationContext) -> None:
    ctx.shapes = apply_color_distribution(
        ctx.shapes,
        ctx.config.palette.colors,
        ctx.config.structure.color_distribution,
        ctx.width,
        ctx.height,
        ctx.rng,
    )


@transform(
    id="S1.04",
    stage=Stage.STRUCTURE,
    dependencies=["S1.03"],
    description="Push overlapping shapes apart",
)
def spacing_pass(ctx: GenerationContext) -> None:
    min_spacing = ctx.config.structure.min_spacing
    if min_spacing <= 0:
        return

    factor = min_spacing / 100
    before = total_overlap(ctx.shapes, factor)
    ctx.shapes = apply_min_spacing(
        ctx.shapes, min_spacing, ctx.width, ctx.height, ctx.engine_config.spacing_passes
    )
    logger.debug(
        "Spacing relaxation: overlap %.1f -> %.1f over %d shapes",
        before, total_overlap(ctx.shapes, factor), ctx.num_shapes,
    )
