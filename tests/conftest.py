"""Shared test fixtures."""

from __future__ import annotations

import pytest

from patternvora.engine.pipeline import load_modules
from patternvora.models.layer import LayerConfig, Palette

PALETTE = Palette(
    name="Test Quad",
    bg="#ffffff",
    colors=["#111111", "#222222", "#333333", "#444444"],
)


def make_config(**fields) -> LayerConfig:
    """LayerConfig with the 4-color test palette and a fixed seed."""
    data = {"seed": 12345, "palette": PALETTE}
    data.update(fields)
    return LayerConfig(**data)


@pytest.fixture(scope="session", autouse=True)
def registered_modules() -> None:
    load_modules()


@pytest.fixture
def config() -> LayerConfig:
    return make_config()
