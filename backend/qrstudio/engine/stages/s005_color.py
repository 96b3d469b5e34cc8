"""Color stage: canonical colors, eye colors and the foreground gradient."""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import stage
from qrstudio.svg.colors import DEFAULT_STOPS, Gradient, canonical_color, linear_coordinates, parse_gradient


def wants_gradient(ctx: GenerationContext) -> bool:
    design = ctx.design
    return str(design.fill_type).lower() == "gradient" or bool(design.gradient_fill)


@stage(id="color", order=5, required=True, description="Resolve fills, eye colors and gradient")
def color_stage(ctx: GenerationContext) -> None:
    design = ctx.design
    foreground = canonical_color(design.foreground_color, "#000000")
    ctx.background_color = canonical_color(design.background_color, "#FFFFFF")
    ctx.background_enabled = design.background_enabled is not False
    ctx.eye_internal_color = canonical_color(design.eye_internal_color, "#000000")
    ctx.eye_external_color = canonical_color(design.eye_external_color, "#000000")

    if not wants_gradient(ctx):
        ctx.foreground_fill = foreground
        return

    if design.gradient_fill:
        gradient = parse_gradient(design.gradient_fill)
    else:
        ctx.warn("Gradient fill type without gradientFill, using default black-gray-black gradient")
        angle = ctx.render.default_gradient_angle
        gradient = Gradient(
            type=ctx.render.default_gradient_type,
            stops=DEFAULT_STOPS,
            angle=angle,
            coords=linear_coordinates(angle),
        )
    ctx.foreground_fill = ctx.document.add_gradient(gradient)
