"""Write SVG output: element helpers plus the ``SvgDocument`` accumulator."""

from __future__ import annotations

from typing import Any

from qrstudio.shapes.paths import fmt
from qrstudio.svg.colors import Gradient

SVG_NS = "http://www.w3.org/2000/svg"

_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&apos;"}


def escape(text: Any) -> str:
    """XML-escape text content or an attribute value."""
    return "".join(_ESCAPES.get(ch, ch) for ch in str(text))


def attr_name(key: str) -> str:
    """``stroke_width`` -> ``stroke-width``. CamelCase SVG names (viewBox) are kept."""
    return key.rstrip("_").replace("_", "-")


def attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(value)
    return escape(value)


def render_attrs(attrs: dict[str, Any]) -> str:
    return " ".join(
        f'{attr_name(k)}="{attr_value(v)}"' for k, v in attrs.items() if v is not None
    )


def element(tag: str, attrs: dict[str, Any] | None = None, children: list[str] | None = None, text: str | None = None) -> str:
    """Render one element. ``children`` are pre-rendered fragments; ``text`` is escaped."""
    attr_str = render_attrs(attrs or {})
    open_tag = f"<{tag} {attr_str}" if attr_str else f"<{tag}"
    if text is not None:
        return f"{open_tag}>{escape(text)}</{tag}>"
    if children:
        return f"{open_tag}>{''.join(children)}</{tag}>"
    return f"{open_tag}/>"


def drop_shadow_filter(
    filter_id: str,
    *,
    region: float = 50,
    dx: float = 2,
    dy: float = 2,
    blur: float = 4,
    color: str = "rgba(0,0,0,0.3)",
) -> str:
    """``<filter>`` with one ``feDropShadow``; ``region`` pads the filter box in percent."""
    return element(
        "filter",
        {
            "id": filter_id,
            "x": f"-{fmt(region)}%",
            "y": f"-{fmt(region)}%",
            "width": f"{fmt(100 + 2 * region)}%",
            "height": f"{fmt(100 + 2 * region)}%",
        },
        [element("feDropShadow", {"dx": dx, "dy": dy, "stdDeviation": blur, "flood_color": color})],
    )


def gradient_def(gradient: Gradient) -> str:
    stops = [
        element("stop", {
            "offset": f"{fmt(s.offset)}%",
            "stop_color": s.color,
            "stop_opacity": s.opacity,
        })
        for s in gradient.stops
    ]
    if gradient.type == "RADIAL":
        attrs = {
            "id": gradient.id,
            "cx": f"{fmt(gradient.cx)}%",
            "cy": f"{fmt(gradient.cy)}%",
            "r": f"{fmt(gradient.r)}%",
            "fx": f"{fmt(gradient.fx if gradient.fx is not None else gradient.cx)}%",
            "fy": f"{fmt(gradient.fy if gradient.fy is not None else gradient.cy)}%",
        }
        return element("radialGradient", attrs, stops)
    x1, y1, x2, y2 = gradient.coords
    attrs = {
        "id": gradient.id,
        "x1": f"{fmt(x1)}%",
        "y1": f"{fmt(y1)}%",
        "x2": f"{fmt(x2)}%",
        "y2": f"{fmt(y2)}%",
    }
    return element("linearGradient", attrs, stops)


class SvgDocument:
    """Ordered defs plus ordered drawable elements, serialized once by ``build()``."""

    def __init__(self, width: float, height: float | None = None) -> None:
        self.width = width
        self.height = width if height is None else height
        self.defs: list[str] = []
        self.elements: list[str] = []
        self._def_ids: set[str] = set()

    def add_def(self, fragment: str, def_id: str | None = None) -> SvgDocument:
        """Append a ``<defs>`` fragment; a repeated ``def_id`` is ignored."""
        if not fragment:
            return self
        if def_id is not None:
            if def_id in self._def_ids:
                return self
            self._def_ids.add(def_id)
        self.defs.append(fragment)
        return self

    def add_gradient(self, gradient: Gradient) -> str:
        self.add_def(gradient_def(gradient), gradient.id)
        return gradient.url

    def add_filter(self, filter_id: str, **kwargs: Any) -> str:
        self.add_def(drop_shadow_filter(filter_id, **kwargs), filter_id)
        return f"url(#{filter_id})"

    def add_element(self, fragment: str) -> SvgDocument:
        if fragment:
            self.elements.append(fragment)
        return self

    def add_path(self, d: str, **attrs: Any) -> SvgDocument:
        if not d:
            return self
        return self.add_element(element("path", {"d": d, **attrs}))

    def add_background(self, fill: str) -> SvgDocument:
        """Full-canvas rect, always the first element regardless of call order."""
        rect = element("rect", {"x": 0, "y": 0, "width": self.width, "height": self.height, "fill": fill})
        self.elements.insert(0, rect)
        return self

    def build(self) -> str:
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="{SVG_NS}" width="{fmt(self.width)}" height="{fmt(self.height)}"'
            f' viewBox="0 0 {fmt(self.width)} {fmt(self.height)}">',
        ]
        if self.defs:
            lines.append("<defs>" + "\n".join(self.defs) + "</defs>")
        lines.extend(self.elements)
        lines.append("</svg>")
        return "\n".join(lines)
