"""Pre-flight design validation.

Returns issues instead of raising, so callers can show every problem at once.
Errors block generation; warnings describe silent fallbacks.
"""

from __future__ import annotations

import logging
from typing import Any

from qrstudio.config import settings
from qrstudio.encoding import payloads
from qrstudio.encoding.matrix import EC_LEVELS, MatrixEncoder, encode_matrix, is_ec_level, normalize_ec_level
from qrstudio.engine.normalizer import canonicalize, classify_advanced_shape, expand_shorthands, normalize
from qrstudio.errors import EncodingError, ValidationError
from qrstudio.shapes.finders import find_finder_dot_shape, find_finder_shape
from qrstudio.shapes.logo import find_background_shape
from qrstudio.shapes.modules import find_module_shape
from qrstudio.svg.colors import is_valid_color

logger = logging.getLogger(__name__)

Issue = dict[str, str]


def _issue(field: str, message: str) -> Issue:
    return {"field": field, "message": message}


def _check_colors(design: dict[str, Any], errors: list[Issue]) -> None:
    for key in ("foregroundColor", "backgroundColor"):
        value = design.get(key)
        if value and not is_valid_color(value):
            errors.append(_issue(f"design.{key}", "Invalid color format"))


def _check_gradient(design: dict[str, Any], errors: list[Issue], warnings: list[Issue]) -> None:
    fill = design.get("gradientFill")
    if str(design.get("fillType") or "").lower() != "gradient" and not fill:
        return
    if not fill:
        warnings.append(_issue(
            "design.gradientFill",
            "fillType is gradient but no gradientFill configuration provided",
        ))
        return
    stops = fill.get("colors") or fill.get("stops") if isinstance(fill, dict) else None
    if not isinstance(stops, list) or len(stops) < 2:
        errors.append(_issue("design.gradientFill.colors", "Gradient must have at least 2 color stops"))


def _check_size(design: dict[str, Any], errors: list[Issue]) -> None:
    size = design.get("size")
    if size is None:
        return
    try:
        value = int(size)
    except (TypeError, ValueError):
        errors.append(_issue("design.size", "Size must be a number"))
        return
    if not settings.min_size <= value <= settings.max_size:
        errors.append(_issue(
            "design.size",
            f"Size must be between {settings.min_size} and {settings.max_size}",
        ))


def _check_shapes(design: dict[str, Any], warnings: list[Issue]) -> None:
    for key, find in (
        ("module", find_module_shape),
        ("finder", find_finder_shape),
        ("finderDot", find_finder_dot_shape),
    ):
        name = design.get(key)
        if name and find(name) is None:
            warnings.append(_issue(f"design.{key}", f"Unknown shape '{name}', falling back to square"))

    _, message = classify_advanced_shape(design.get("advancedShape"))
    if message:
        warnings.append(_issue("design.advancedShape", message))

    bg_shape = design.get("logoBackgroundShape")
    if bg_shape and find_background_shape(bg_shape) is None:
        warnings.append(_issue("design.logoBackgroundShape", f"Unknown logo background shape '{bg_shape}'"))


def validate_design(
    payload_type: Any,
    data: Any,
    design: Any = None,
    matrix_encoder: MatrixEncoder = encode_matrix,
) -> dict[str, Any]:
    """``{valid, errors, warnings}`` for a prospective generate call."""
    errors: list[Issue] = []
    warnings: list[Issue] = []

    if not payload_type:
        errors.append(_issue("type", "Type is required"))
    elif not payloads.is_supported(payload_type):
        errors.append(_issue("type", f"Unsupported type: {payload_type}"))

    if data is None or data == "":
        errors.append(_issue("data", "Data is required"))

    if design is None:
        design = {}
    if not isinstance(design, dict):
        errors.append(_issue("design", "Design must be an object"))
        design = {}
    canonical = expand_shorthands(canonicalize(design))

    _check_colors(canonical, errors)
    _check_gradient(canonical, errors, warnings)

    level = canonical.get("errorCorrection")
    if level and not is_ec_level(level):
        errors.append(_issue(
            "design.errorCorrection",
            f"Invalid error correction level. Must be one of: {', '.join(EC_LEVELS)}",
        ))

    _check_size(canonical, errors)
    _check_shapes(canonical, warnings)

    if not errors:
        try:
            normalize(design)
        except ValidationError as e:
            errors.extend(_issue(f"design.{i['field']}", i["message"]) for i in e.issues)

    if not errors:
        try:
            content = payloads.encode(payload_type, data)
            matrix_encoder(content, normalize_ec_level(level or "M"))
        except EncodingError as e:
            errors.append(_issue("data", f"Data encoding error: {e}"))

    logger.debug("Validated design: %d errors, %d warnings", len(errors), len(warnings))
    return {"valid": not errors, "errors": errors, "warnings": warnings}
