"""Engine configuration: tunables of the post-generation passes and hit testing.

Defaults reproduce the behaviour of previously exported artifacts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    # Pairwise repulsion sweeps in the minimum-spacing pass
    spacing_passes: int = 3

    # Regularity snaps toward a grid_size x grid_size lattice (never below 8)
    regularity_grid_size: float = 10.0

    # Uniform reference size for size_variation = 0, multiplied by scale
    reference_size_per_scale: float = 30.0

    # Hit radius = max(size / divisor, floor)
    hit_radius_divisor: float = 1.4
    hit_radius_floor: float = 20.0
