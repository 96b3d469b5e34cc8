"""Logo stage: load the image and place it with its background plate."""

from __future__ import annotations

import base64
import logging

from qrstudio.engine.context import GenerationContext
from qrstudio.engine.logo_loader import LOGO_SOURCE_KEYS, load_logo
from qrstudio.engine.registry import stage
from qrstudio.shapes.logo import (
    LogoBackgroundShape,
    background_path,
    image_element,
    place_logo,
    resolve_background_shape,
)
from qrstudio.svg.builder import element
from qrstudio.svg.colors import canonical_color

logger = logging.getLogger(__name__)


def logo_source(ctx: GenerationContext) -> str | None:
    source = ctx.design.first(*LOGO_SOURCE_KEYS)
    return source if isinstance(source, str) and source.strip() else None


def has_logo(ctx: GenerationContext) -> bool:
    return logo_source(ctx) is not None


@stage(id="logo", order=200, should_run=has_logo, description="Embed logo image")
def logo_stage(ctx: GenerationContext) -> None:
    design = ctx.design
    fetch = ctx.fetcher or load_logo
    asset = fetch(logo_source(ctx))

    placement = place_logo(
        ctx.size,
        float(design.logo_scale),
        float(design.logo_position_x),
        float(design.logo_position_y),
        float(design.logo_rotate),
    )

    parts = []
    if design.logo_background:
        shape, warning = resolve_background_shape(design.logo_background_shape)
        ctx.warn(warning)
        if shape is not LogoBackgroundShape.NONE:
            plate = background_path(shape, placement, float(design.logo_background_scale))
            parts.append(element("path", {
                "d": plate.d,
                "fill": canonical_color(design.logo_background_fill, "#FFFFFF"),
            }))

    parts.append(image_element(placement, asset.mime_type, base64.b64encode(asset.data).decode("ascii")))
    ctx.logo = "".join(parts)
    logger.debug("Logo placed: %.1fpx at (%.1f, %.1f)", placement.size, placement.x, placement.y)
