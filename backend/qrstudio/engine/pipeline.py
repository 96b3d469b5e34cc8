"""Pipeline orchestrator: runs stages in order, isolating optional ones."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import StageRegistry, get_registry

logger = logging.getLogger(__name__)

STAGES_PACKAGE = "qrstudio.engine.stages"


class Pipeline:
    """Orchestrates the render stages."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: GenerationContext) -> GenerationContext:
        """Run every stage whose ``should_run`` holds.

        Required stages propagate their exceptions. Optional stages are
        logged, recorded in ``ctx.errors`` and skipped.
        """
        start = time.perf_counter()
        ordered = self.registry.all()

        for spec in ordered:
            if not spec.should_run(ctx):
                logger.debug("  %s skipped", spec.id)
                continue
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                if spec.required:
                    raise
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
                continue
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.completed_stages.append(spec.id)
            ctx.timings_ms[spec.id] = round(elapsed, 3)
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            total,
        )
        return ctx


def load_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    package = importlib.import_module(STAGES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{STAGES_PACKAGE}.{module_name}")


def create_pipeline() -> Pipeline:
    """Create a pipeline with all stages registered."""
    load_stages()
    return Pipeline()
