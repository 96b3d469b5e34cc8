"""Render tuning constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Fixed proportions the stages draw with."""

    # Sticker side as a fraction of the output size, centered
    sticker_scale: float = 0.25

    # Size used by the preview endpoint when none is given
    preview_size: int = 256

    # Gradient used when fillType is gradient but no descriptor was sent
    default_gradient_type: str = "LINEAR"
    default_gradient_angle: float = 45.0

    # Middle finder ring fill when the background is disabled
    transparent_finder_fill: str = "white"
