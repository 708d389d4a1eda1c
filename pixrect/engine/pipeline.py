"""Pipeline orchestrator: runs the partition stages for one color in dependency order."""

from __future__ import annotations

import logging
import time

from pixrect.engine.context import PartitionContext
from pixrect.engine.registry import Phase, StageRegistry, get_registry

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the stage pipeline for a single color label."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: PartitionContext) -> PartitionContext:
        """Run every stage on ``ctx``.

        A failing stage is recorded in ``ctx.errors`` and stops the run, since
        every later stage reads its output.
        """
        start = time.perf_counter()

        skip_ids = self._adaptive_gate(ctx)
        ordered = self.registry.resolve_order(skip_ids)

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                ctx.errors[spec.id] = f"{type(e).__name__}: {e}"
                logger.warning("  %s FAILED for label %r: %s", spec.id, ctx.label, e)
                break
            ctx.completed_stages.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.debug(
            "Label %r (%dx%d, %d cells): %d/%d stages (%d skipped) in %.1fms",
            ctx.label,
            ctx.width,
            ctx.height,
            ctx.cell_count,
            len(ctx.completed_stages),
            len(ordered),
            len(skip_ids),
            total,
        )
        return ctx

    def _adaptive_gate(self, ctx: PartitionContext) -> set[str]:
        """Stages that cannot change the result for this mask.

        A solid rectangle has no reflex corners, so there is nothing to pair,
        match or cut.
        """
        skip: set[str] = set()
        if ctx.is_solid:
            for phase in (Phase.DIAGONALS, Phase.MATCHING, Phase.CUTS):
                skip.update(s.id for s in self.registry.get_phase(phase))
        return skip


def create_pipeline() -> Pipeline:
    """Factory function for a pipeline over the global stage registry."""
    return Pipeline()
