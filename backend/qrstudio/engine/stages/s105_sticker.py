"""Sticker stage: a badge centered over the modules."""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.registry import stage
from qrstudio.shapes.stickers import SHADOW_ID, StickerType, find_sticker, render_sticker, sticker_box
from qrstudio.svg.colors import canonical_color

STICKER_KEYS = ("centerSticker", "stickerType", "advancedShape")


def sticker_type(ctx: GenerationContext) -> StickerType | None:
    for key in STICKER_KEYS:
        name = ctx.design.get(key)
        if not name:
            continue
        found = find_sticker(name)
        if found is not None and found is not StickerType.NONE:
            return found
    return None


def has_sticker(ctx: GenerationContext) -> bool:
    return sticker_type(ctx) is not None


@stage(id="sticker", order=105, should_run=has_sticker, description="Render center sticker")
def sticker_stage(ctx: GenerationContext) -> None:
    design = ctx.design
    sticker = sticker_type(ctx)
    color = design.first("stickerColor", "stickerBackgroundColor", "advancedShapeFrameColor")
    text_color = design.first("stickerTextColor", "textColor", default="#FFFFFF")
    text = design.first("stickerText", "text")
    scale = design.get("stickerScale", ctx.render.sticker_scale)
    drop_shadow = design.get("stickerDropShadow") is not False and design.advanced_shape_drop_shadow is not False

    cx, cy, side = sticker_box(ctx.size, float(scale))
    fragment = render_sticker(
        sticker,
        cx,
        cy,
        side,
        canonical_color(color) if color else None,
        canonical_color(text_color, "#FFFFFF"),
        str(text) if text else None,
        drop_shadow=drop_shadow,
    )
    ctx.document.add_def(fragment.defs, SHADOW_ID)
    ctx.sticker = fragment
