"""Waves: full-width horizontal bands, one shape per band."""

from __future__ import annotations

from patternvora.engine.generators.common import draw_phase, draw_speed
from patternvora.engine.registry import generator
from patternvora.engine.rng import SeededRandom
from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData


@generator("waves", self_structured=True)
def generate_waves(
    width: float, height: float, base_size: float, config: LayerConfig, rng: SeededRandom
) -> list[ShapeData]:
    layer_count = config.complexity // 10 + 3
    step = height / layer_count

    return [
        ShapeData(
            index=i,
            type="wave",
            x=0,
            y=i * step + step / 2,
            size=step * 2,
            rotation=0,
            color=rng.next_item(config.palette.colors),
            stroke=False,
            speed_factor=draw_speed(rng),
            phase_offset=draw_phase(rng),
            # Band index drives the renderer's waveform shaping
            points=i,
        )
        for i in range(layer_count)
    ]
