"""Finder stage: the three corner markers."""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import stage
from qrstudio.shapes.finders import (
    FinderDotShape,
    finder_pattern,
    find_finder_dot_shape,
    resolve_finder_dot_shape,
    resolve_finder_shape,
)


def _dot_shape(ctx: GenerationContext, finder_name: str) -> FinderDotShape:
    """An explicitly empty finderDot follows the finder shape when the dot table knows it."""
    raw = ctx.design.finder_dot
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return find_finder_dot_shape(finder_name) or FinderDotShape.SQUARE
    dot, warning = resolve_finder_dot_shape(raw)
    ctx.warn(warning)
    return dot


@stage(id="finders", order=8, required=True, description="Build finder pattern paths")
def finder_stage(ctx: GenerationContext) -> None:
    shape, warning = resolve_finder_shape(ctx.design.finder)
    ctx.warn(warning)
    dot = _dot_shape(ctx, shape.value)

    m = ctx.module_size
    origin = ctx.origin
    ctx.finders = [
        finder_pattern(shape, dot, origin + col * m, origin + row * m, m)
        for row, col in ctx.matrix.finder_origins()
    ]
