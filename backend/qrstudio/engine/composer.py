"""Assemble the final SVG from a finished GenerationContext.

Draw order, bottom to top: background, frame (before QR), modules, finder
patterns, sticker, logo, frame (after QR).
"""

from __future__ import annotations

from qrstudio.engine.context import GenerationContext
from qrstudio.shapes.paths import ShapePath


def _add_shape(ctx: GenerationContext, shape: ShapePath, fill: str, evenodd: bool = False) -> None:
    ctx.document.add_path(
        shape.d,
        fill=fill,
        fill_rule="evenodd" if evenodd else None,
    )


def compose(ctx: GenerationContext) -> str:
    doc = ctx.document
    if ctx.background_enabled:
        doc.add_background(ctx.background_color)

    if ctx.frame is not None:
        doc.add_element(ctx.frame.before_qr)

    doc.add_path(ctx.module_path, fill=ctx.foreground_fill, fill_rule="evenodd")

    middle_fill = ctx.background_color if ctx.background_enabled else ctx.render.transparent_finder_fill
    for pattern in ctx.finders:
        _add_shape(ctx, pattern.outer, ctx.eye_external_color, evenodd=True)
        _add_shape(ctx, pattern.middle, middle_fill, evenodd=True)
        _add_shape(ctx, pattern.dot, ctx.eye_internal_color)

    if ctx.sticker is not None:
        doc.add_element(ctx.sticker.element)
    doc.add_element(ctx.logo)
    if ctx.frame is not None:
        doc.add_element(ctx.frame.after_qr)

    return doc.build()
