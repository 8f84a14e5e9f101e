"""GenerationContext: the state flowing through one generation call.

Created fresh per call and discarded afterwards; nothing here outlives the
call that built it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from patternvora.engine.config import EngineConfig
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData


@dataclass
class GenerationContext:
    width: float
    height: float
    config: LayerConfig
    # Seeded from config.seed unless supplied
    rng: SeededRandom | None = None
    # Shared tiling unit: min(width, height) * scale / 10
    base_size: float = 0.0
    # Current shape sequence; each pass replaces it with a new list
    shapes: list[ShapeData] = field(default_factory=list)
    engine_config: EngineConfig = field(default_factory=EngineConfig)

    # --- Pipeline metadata ---
    completed_transforms: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = SeededRandom(self.config.seed)
        if not self.base_size:
            self.base_size = min(self.width, self.height) * (self.config.scale / 10)

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0 or self.config.complexity <= 0

    @property
    def num_shapes(self) -> int:
        return len(self.shapes)
