"""Stage registry. Every partition stage is a standalone function registered via decorator.

Usage:
    @stage(id="S1.01", phase=Phase.DIAGONALS, dependencies=["S0.01"])
    def diagonal_generation(ctx: PartitionContext) -> None:
        ctx.verticals, ctx.horizontals = find_diagonals(ctx.corners)

Adding a new stage = writing one function with the decorator in a module that
``pixrect.engine`` imports.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from pixrect.engine.context import PartitionContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    CLASSIFY = 0
    DIAGONALS = 1
    MATCHING = 2
    CUTS = 3
    TRACING = 4


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["PartitionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of partition stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def get_phase(self, phase: Phase) -> list[StageSpec]:
        specs = [s for s in self._stages.values() if s.phase == phase]
        return sorted(specs, key=lambda s: s.id)

    def resolve_order(self, skip_ids: set[str] | None = None) -> list[StageSpec]:
        """Topological order of all stages; ready stages run in (phase, id) order.

        Skipped stages are dropped after sorting, so they still constrain the
        order of the stages around them.
        """
        pool = self._stages
        dependents: dict[str, list[str]] = {sid: [] for sid in pool}
        in_degree: dict[str, int] = {}
        for sid, spec in pool.items():
            deps = [d for d in spec.dependencies if d in pool]
            in_degree[sid] = len(deps)
            for dep in deps:
                dependents[dep].append(sid)

        ready = [(pool[sid].phase, sid) for sid, d in in_degree.items() if d == 0]
        heapq.heapify(ready)
        ordered: list[StageSpec] = []

        while ready:
            _, sid = heapq.heappop(ready)
            ordered.append(pool[sid])
            for other_id in dependents[sid]:
                in_degree[other_id] -= 1
                if in_degree[other_id] == 0:
                    heapq.heappush(ready, (pool[other_id].phase, other_id))

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        skip = skip_ids or set()
        return [s for s in ordered if s.id not in skip]

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["PartitionContext"], None]):
        spec = StageSpec(
            id=id,
            phase=phase,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
