"""Module stage: one combined path for every dark module outside the finders."""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import stage
from qrstudio.shapes.modules import NO_NEIGHBORS, module_path, resolve_module_shape


@stage(id="modules", order=7, required=True, description="Build module path data")
def module_stage(ctx: GenerationContext) -> None:
    shape, warning = resolve_module_shape(ctx.design.module)
    ctx.warn(warning)

    matrix = ctx.matrix
    m = ctx.module_size
    origin = ctx.origin
    parts = []
    for row, col in matrix.dark_modules():
        neighbors = matrix.neighbors(row, col) if shape.uses_neighbors else NO_NEIGHBORS
        parts.append(module_path(shape, origin + col * m, origin + row * m, m, neighbors))
    ctx.module_path = " ".join(p for p in parts if p)
