"""Tests for the stage registry."""

import pytest

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.pipeline import load_stages
from qrstudio.engine.registry import StageRegistry, StageSpec, get_registry


def _noop(ctx: GenerationContext) -> None:
    pass


def test_register_and_get():
    reg = StageRegistry()
    spec = StageSpec(id="modules", order=7, fn=_noop)
    reg.register(spec)
    assert reg.get("modules") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="modules", order=7, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(StageSpec(id="modules", order=8, fn=_noop))


def test_all_sorted_by_order():
    reg = StageRegistry()
    reg.register(StageSpec(id="logo", order=200, fn=_noop))
    reg.register(StageSpec(id="color", order=5, fn=_noop))
    reg.register(StageSpec(id="frame", order=110, fn=_noop))
    assert [s.id for s in reg.all()] == ["color", "frame", "logo"]


def test_builtin_stages_registered():
    load_stages()
    reg = get_registry()
    ids = [s.id for s in reg.all()]
    assert ids == ["color", "modules", "finders", "sticker", "frame", "logo"]
    required = {s.id for s in reg.all() if s.required}
    assert required == {"color", "modules", "finders"}


def test_load_stages_is_idempotent():
    load_stages()
    before = get_registry().count
    load_stages()
    assert get_registry().count == before
