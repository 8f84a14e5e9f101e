"""Application state consumed by the hit tester."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from patternvora.models.layer import LayerConfig
from patternvora.models.shape import ShapeData

AspectRatio = Literal["1:1", "16:9", "9:16", "4:5", "3:4"]


class Layer(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    visible: bool = True
    locked: bool = False
    blend_mode: str = "source-over"
    opacity: float = 1.0
    config: LayerConfig = Field(default_factory=LayerConfig)


class AppState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: Literal[2] = 2
    aspect_ratio: AspectRatio = "1:1"
    # Bottom-most first; the last layer draws on top
    layers: list[Layer] = Field(default_factory=list)
    active_layer_id: str = ""


@dataclass(frozen=True)
class HitResult:
    shape: ShapeData
    layer_id: str

    def to_wire(self) -> dict:
        return {**self.shape.to_wire(), "layerId": self.layer_id}
