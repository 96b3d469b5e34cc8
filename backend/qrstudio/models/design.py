"""Canonical design schema.

Fields are snake_case in Python and camelCase on the wire. Keys the schema
does not declare (sticker text, frame captions, logo sources) ride along as
extras and stay reachable through ``DesignConfig.get``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from qrstudio.config import settings


class DesignConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    # Fill
    fill_type: str = "solid"
    foreground_color: str = "#000000"
    background_color: str = "#FFFFFF"
    eye_internal_color: str = "#000000"
    eye_external_color: str = "#000000"
    background_enabled: bool = True
    gradient_fill: dict[str, Any] | None = None

    # Shapes
    module: str = "square"
    finder: str = "square"
    finder_dot: str = "square"

    # Logo
    logo_url: str | None = None
    logo_type: str = "preset"
    logo_scale: float = 0.2
    logo_position_x: float = 0.5
    logo_position_y: float = 0.5
    logo_rotate: float = 0
    logo_background: bool = True
    logo_background_fill: str = "#FFFFFF"
    logo_background_scale: float = 1.5
    logo_background_shape: str = "circle"

    # Symbol
    error_correction: str = "M"
    margin: int = 4
    size: int = settings.default_size

    # Stickers and frames
    advanced_shape: str = "none"
    advanced_shape_drop_shadow: bool = False
    advanced_shape_frame_color: str = "#000000"
    advanced_shape_text_color: str = "#FFFFFF"

    @classmethod
    def merge(cls, defaults: DesignConfig, overrides: dict[str, Any]) -> DesignConfig:
        """New config: ``defaults`` with wire-keyed ``overrides`` laid on top."""
        return cls.model_validate({**defaults.to_wire(), **overrides})

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def get(self, key: str, default: Any = None) -> Any:
        """Value for a wire or Python key, declared or extra; ``None`` counts as missing."""
        name = _WIRE_TO_FIELD.get(key, key)
        if name in type(self).model_fields:
            value = getattr(self, name)
        else:
            value = (self.model_extra or {}).get(key)
        return default if value is None else value

    def first(self, *keys: str, default: Any = None) -> Any:
        """First truthy value among ``keys``."""
        for key in keys:
            value = self.get(key)
            if value:
                return value
        return default


_WIRE_TO_FIELD = {to_camel(name): name for name in DesignConfig.model_fields}

DEFAULT_DESIGN = DesignConfig()
