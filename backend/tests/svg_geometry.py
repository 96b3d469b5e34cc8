"""Path inspection over svgpathtools.

Reads geometry back out of rendered SVG: path bounding boxes and the
``<path>`` elements of a document.
"""

from __future__ import annotations

import logging
import re

from svgpathtools import parse_path

logger = logging.getLogger(__name__)

_PATH_TAG_RE = re.compile(r"<path\b([^>]*)/?>", re.IGNORECASE)
_ATTR_RE = re.compile(r'([\w:-]+)\s*=\s*"([^"]*)"')
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"([^"]+)"')

Bounds = tuple[float, float, float, float]


def path_bounds(d: str) -> Bounds | None:
    """(xmin, ymin, xmax, ymax) of path data ``d``; ``None`` for an empty path."""
    if not d or not d.strip():
        return None
    path = parse_path(d)
    if len(path) == 0:
        return None
    xmin, xmax, ymin, ymax = path.bbox()
    return (xmin, ymin, xmax, ymax)


def union_bounds(boxes: list[Bounds]) -> Bounds | None:
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def path_elements(svg_text: str) -> list[dict[str, str]]:
    """Attributes of every ``<path>`` in document order."""
    return [dict(_ATTR_RE.findall(m.group(1))) for m in _PATH_TAG_RE.finditer(svg_text)]


def view_box(svg_text: str) -> tuple[float, ...] | None:
    m = _VIEWBOX_RE.search(svg_text)
    if not m:
        return None
    return tuple(float(v) for v in m.group(1).replace(",", " ").split())
