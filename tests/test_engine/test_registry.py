"""Tests for the generator and transform registries."""

import pytest

from patternvora.engine.context import GenerationContext
from patternvora.engine.registry import (
    FALLBACK_STYLE,
    GeneratorSpec,
    Stage,
    StyleRegistry,
    TransformRegistry,
    TransformSpec,
    get_registry,
    get_style_registry,
)


def _noop(ctx: GenerationContext) -> None:
    pass


def _gen(width, height, base_size, config, rng):
    return []


def test_register_and_get():
    reg = TransformRegistry()
    spec = TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop)
    reg.register(spec)
    assert reg.get("S1.01") is spec
    assert reg.count == 1


def test_duplicate_transform_rejected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop))


def test_get_stage():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="G0.01", stage=Stage.GENERATION, fn=_noop))
    reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop))
    structure = reg.get_stage(Stage.STRUCTURE)
    assert [s.id for s in structure] == ["S1.01"]


def test_resolve_order_with_deps():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="S1.02", stage=Stage.STRUCTURE, fn=_noop, dependencies=["S1.09"]))
    reg.register(TransformSpec(id="S1.09", stage=Stage.STRUCTURE, fn=_noop))
    ids = [s.id for s in reg.resolve_order({"S1.02"})]
    assert ids == ["S1.09", "S1.02"]


def test_resolve_order_all():
    reg = TransformRegistry()
    for i in range(5):
        reg.register(TransformSpec(id=f"S1.0{i + 1}", stage=Stage.STRUCTURE, fn=_noop))
    assert len(reg.resolve_order(None)) == 5


def test_circular_dependency_detected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="A", stage=Stage.STRUCTURE, fn=_noop, dependencies=["B"]))
    reg.register(TransformSpec(id="B", stage=Stage.STRUCTURE, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_style_registry_duplicate_and_fallback():
    styles = StyleRegistry()
    styles.register(GeneratorSpec(style=FALLBACK_STYLE, fn=_gen))
    styles.register(GeneratorSpec(style="waves", fn=_gen, self_structured=True))
    with pytest.raises(ValueError):
        styles.register(GeneratorSpec(style="waves", fn=_gen))
    assert styles.get("no-such-style").style == FALLBACK_STYLE
    assert "waves" in styles
    assert styles.count == 2


def test_global_registries_are_populated():
    styles = get_style_registry()
    assert styles.count == 21
    for style in ("truchet", "guilloche", "herringbone", "waves", "isometric", "grid", "hex", "mosaic"):
        assert styles.get(style).self_structured
    for style in ("geometric", "radial", "custom-image", "typo"):
        assert not styles.get(style).self_structured

    ids = [s.id for s in get_registry().all()]
    assert ids == ["G0.01", "S1.01", "S1.02", "S1.03", "S1.04", "S2.01"]


def test_resolve_order_sorts_by_stage_then_dependencies():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="S2.01", stage=Stage.SYMMETRY, fn=_noop))
    reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop, dependencies=["S1.02"]))
    reg.register(TransformSpec(id="S1.02", stage=Stage.STRUCTURE, fn=_noop, dependencies=["G0.01"]))
    reg.register(TransformSpec(id="G0.01", stage=Stage.GENERATION, fn=_noop))
    assert [s.id for s in reg.resolve_order()] == ["G0.01", "S1.02", "S1.01", "S2.01"]
    assert [s.id for s in reg.get_stage(Stage.STRUCTURE)] == ["S1.02", "S1.01"]


def test_dependency_on_later_stage_rejected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop, dependencies=["S2.01"]))
    reg.register(TransformSpec(id="S2.01", stage=Stage.SYMMETRY, fn=_noop))
    with pytest.raises(ValueError, match="later-stage"):
        reg.resolve_order()


def test_unknown_requested_transform():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="S1.01", stage=Stage.STRUCTURE, fn=_noop, dependencies=["S1.00"]))
    with pytest.raises(KeyError):
        reg.resolve_order({"S1.01"})
