"""Frame stage: border and caption decorations."""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import stage
from qrstudio.shapes.frames import SHADOW_ID, FrameType, find_frame, render_frame
from qrstudio.svg.colors import canonical_color


def _lookup(ctx: GenerationContext, key: str) -> FrameType | None:
    found = find_frame(ctx.design.get(key))
    return None if found is FrameType.NONE else found


def frame_type(ctx: GenerationContext) -> FrameType | None:
    return _lookup(ctx, "advancedShape") or _lookup(ctx, "frame")


def has_frame(ctx: GenerationContext) -> bool:
    return frame_type(ctx) is not None


@stage(id="frame", order=110, should_run=has_frame, description="Render frame decorations")
def frame_stage(ctx: GenerationContext) -> None:
    design = ctx.design
    if _lookup(ctx, "advancedShape") is not None:
        color = design.first("advancedShapeFrameColor", "frameColor", default="#000000")
        text_color = design.first("advancedShapeTextColor", "textColor", default="#FFFFFF")
    else:
        # Standalone ``frame`` key: its own colors win over the advancedShape defaults.
        color = design.first("frameColor", "advancedShapeFrameColor", default="#000000")
        text_color = design.first("textColor", "advancedShapeTextColor", default="#FFFFFF")
    drop_shadow = bool(design.advanced_shape_drop_shadow or design.get("dropShadow"))
    text = design.get("frameText")

    fragment = render_frame(
        frame_type(ctx),
        ctx.size,
        canonical_color(color),
        canonical_color(text_color, "#FFFFFF"),
        str(text) if text else None,
        drop_shadow=drop_shadow,
    )
    ctx.document.add_def(fragment.defs, SHADOW_ID)
    ctx.frame = fragment
