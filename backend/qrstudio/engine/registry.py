"""Stage registry: every render stage is a standalone function registered via decorator.

Usage:
    @stage(id="modules", order=7, required=True)
    def module_stage(ctx: GenerationContext) -> None:
        ctx.module_path = build(ctx.matrix)

Adding a stage = creating one file under ``engine/stages`` with the decorator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from qrstudio.engine.context import GenerationContext

logger = logging.getLogger(__name__)


def _always(ctx: "GenerationContext") -> bool:
    return True


@dataclass
class StageSpec:
    id: str
    order: int
    fn: Callable[["GenerationContext"], None]
    should_run: Callable[["GenerationContext"], bool] = _always
    required: bool = False
    description: str = ""


class StageRegistry:
    """Registry of render stages, run in ascending ``order``."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (order %d)", spec.id, spec.order)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.order, s.id))

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
    order: int,
    should_run: Callable[["GenerationContext"], bool] | None = None,
    required: bool = False,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["GenerationContext"], None]):
        spec = StageSpec(
            id=id,
            order=order,
            fn=fn,
            should_run=should_run or _always,
            required=required,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
