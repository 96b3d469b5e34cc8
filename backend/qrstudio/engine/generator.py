"""QrGenerator: payload -> matrix -> pipeline -> SVG."""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from qrstudio.config import settings
from qrstudio.encoding import payloads
from qrstudio.encoding.matrix import MatrixEncoder, encode_matrix, normalize_ec_level
from qrstudio.engine import capabilities as _capabilities
from qrstudio.engine import validation
from qrstudio.engine.config import RenderConfig
from qrstudio.engine.context import GenerationContext, LogoFetcher
from qrstudio.engine.composer import compose
from qrstudio.engine.normalizer import classify_advanced_shape, normalize
from qrstudio.engine.pipeline import Pipeline, create_pipeline
from qrstudio.errors import ValidationError
from qrstudio.svg.builder import SvgDocument

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    svg: str
    meta: dict[str, Any]
    warnings: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def svg_base64(self) -> str:
        return base64.b64encode(self.svg.encode("utf-8")).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:image/svg+xml;base64,{self.svg_base64}"


def _option(options: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if options.get(key) is not None:
            return options[key]
    return None


def _check_range(size: int, margin: int) -> None:
    issues = []
    if not settings.min_size <= size <= settings.max_size:
        issues.append({
            "field": "size",
            "message": f"Size must be between {settings.min_size} and {settings.max_size}",
        })
    if margin < 0:
        issues.append({"field": "margin", "message": "Margin must not be negative"})
    if issues:
        raise ValidationError(issues)


class QrGenerator:
    """Stateless apart from its collaborators; safe to share between requests."""

    def __init__(
        self,
        matrix_encoder: MatrixEncoder = encode_matrix,
        fetcher: LogoFetcher | None = None,
        pipeline: Pipeline | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        self.matrix_encoder = matrix_encoder
        self.fetcher = fetcher
        self.config = config or RenderConfig()
        self.pipeline = pipeline or create_pipeline()

    def generate(
        self,
        payload_type: str,
        data: Any,
        design: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> GenerationResult:
        """Render one QR code.

        Raises ``EncodingError`` for bad payloads and ``ValidationError`` for
        a malformed design or out-of-range size. Optional decorations that
        fail are dropped and reported in ``errors``.
        """
        start = time.perf_counter()
        options = options or {}
        config = normalize(design)

        size_opt = _option(options, "size")
        size = int(config.size if size_opt is None else size_opt)
        margin_opt = _option(options, "marginModules", "margin")
        margin = int(config.margin if margin_opt is None else margin_opt)
        _check_range(size, margin)

        content = payloads.encode(payload_type, data)
        ec_level = normalize_ec_level(config.error_correction)
        matrix = self.matrix_encoder(content, ec_level)

        ctx = GenerationContext(
            payload_type=payload_type,
            content=content,
            design=config,
            matrix=matrix,
            size=size,
            margin=margin,
            document=SvgDocument(size),
            render=self.config,
            fetcher=self.fetcher,
        )
        _, message = classify_advanced_shape(config.advanced_shape)
        ctx.warn(message)

        self.pipeline.run(ctx)
        svg = compose(ctx)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Generated %s QR v%d (%dx%d, EC %s) at %dpx in %.0fms",
            payload_type, matrix.version, matrix.size, matrix.size, ec_level, size, elapsed,
        )
        meta = {
            "moduleCount": matrix.size,
            "version": matrix.version,
            "errorCorrection": ec_level,
            "type": payload_type,
            "size": size,
        }
        return GenerationResult(svg=svg, meta=meta, warnings=list(ctx.warnings), errors=dict(ctx.errors))

    def validate_design(self, payload_type: Any, data: Any, design: Any = None) -> dict[str, Any]:
        return validation.validate_design(payload_type, data, design, matrix_encoder=self.matrix_encoder)

    def capabilities(self) -> dict[str, Any]:
        return _capabilities.capabilities()


_generator: QrGenerator | None = None


def get_generator() -> QrGenerator:
    """Process-wide default generator."""
    global _generator
    if _generator is None:
        _generator = QrGenerator()
    return _generator


def generate(
    payload_type: str,
    data: Any,
    design: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
) -> GenerationResult:
    return get_generator().generate(payload_type, data, design, options)


def validate_design(payload_type: Any, data: Any, design: Any = None) -> dict[str, Any]:
    return get_generator().validate_design(payload_type, data, design)


def capabilities() -> dict[str, Any]:
    return _capabilities.capabilities()
