"""Tests for the stage registry."""

import pytest

from pixrect.engine.context import PartitionContext
from pixrect.engine.registry import Phase, StageRegistry, StageSpec, get_registry


def _noop(ctx: PartitionContext) -> None:
    pass


def test_register_and_get():
    reg = StageRegistry()
    spec = StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop)
    reg.register(spec)
    assert reg.get("S0.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop))


def test_get_phase():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop))
    reg.register(StageSpec(id="S3.02", phase=Phase.CUTS, fn=_noop))
    reg.register(StageSpec(id="S3.01", phase=Phase.CUTS, fn=_noop))
    cuts = reg.get_phase(Phase.CUTS)
    assert [s.id for s in cuts] == ["S3.01", "S3.02"]


def test_resolve_order_with_deps():
    reg = StageRegistry()
    reg.register(StageSpec(id="S4.01", phase=Phase.TRACING, fn=_noop, dependencies=["S0.01"]))
    reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop))
    ids = [s.id for s in reg.resolve_order()]
    assert ids == ["S0.01", "S4.01"]


def test_dependency_outranks_phase():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.02", phase=Phase.CLASSIFY, fn=_noop, dependencies=["S1.01"]))
    reg.register(StageSpec(id="S1.01", phase=Phase.DIAGONALS, fn=_noop))
    ids = [s.id for s in reg.resolve_order()]
    assert ids == ["S1.01", "S0.02"]


def test_resolve_order_skips():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop))
    reg.register(StageSpec(id="S1.01", phase=Phase.DIAGONALS, fn=_noop, dependencies=["S0.01"]))
    reg.register(StageSpec(id="S4.01", phase=Phase.TRACING, fn=_noop, dependencies=["S1.01"]))
    ids = [s.id for s in reg.resolve_order({"S1.01"})]
    assert ids == ["S0.01", "S4.01"]


def test_cycle_detected():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.01", phase=Phase.CLASSIFY, fn=_noop, dependencies=["S0.02"]))
    reg.register(StageSpec(id="S0.02", phase=Phase.CLASSIFY, fn=_noop, dependencies=["S0.01"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_global_registry_has_every_stage():
    ids = [s.id for s in get_registry().resolve_order()]
    assert ids == ["S0.01", "S1.01", "S2.01", "S3.01", "S3.02", "S4.01"]
