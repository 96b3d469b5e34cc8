"""GenerationContext: the single mutable state object flowing through all stages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from qrstudio.encoding.matrix import QrMatrix
from qrstudio.engine.config import RenderConfig
from qrstudio.models.design import DesignConfig
from qrstudio.shapes.finders import FinderPattern
from qrstudio.shapes.frames import FrameFragment
from qrstudio.shapes.stickers import StickerFragment
from qrstudio.svg.builder import SvgDocument

if TYPE_CHECKING:
    from qrstudio.engine.logo_loader import LogoAsset

LogoFetcher = Callable[[str], "LogoAsset"]


@dataclass
class GenerationContext:
    """Shared state for one render."""

    payload_type: str
    content: str
    design: DesignConfig
    matrix: QrMatrix
    size: int
    margin: int
    document: SvgDocument
    render: RenderConfig = field(default_factory=RenderConfig)
    fetcher: LogoFetcher | None = None

    # --- Colors (color stage) ---
    foreground_fill: str = "#000000"
    background_color: str = "#FFFFFF"
    background_enabled: bool = True
    eye_internal_color: str = "#000000"
    eye_external_color: str = "#000000"

    # --- Geometry ---
    module_path: str = ""
    finders: list[FinderPattern] = field(default_factory=list)

    # --- Decorations ---
    sticker: StickerFragment | None = None
    frame: FrameFragment | None = None
    logo: str = ""

    # --- Pipeline metadata ---
    completed_stages: list[str] = field(default_factory=list)
    timings_ms: dict[str, float] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def module_size(self) -> float:
        """Pixel side of one module: size / (N + 2 * margin)."""
        return self.size / (self.matrix.size + 2 * self.margin)

    @property
    def origin(self) -> float:
        """Offset of the first module from the canvas edge."""
        return self.margin * self.module_size

    def warn(self, message: str | None) -> None:
        if message:
            self.warnings.append(message)
