"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Payload type (url, wifi, vcard, ...)")
    data: Any = Field(..., description="Payload data: an object for structured types, or a string")
    design: dict[str, Any] = Field(default_factory=dict, description="Design configuration, any key spelling")
    size: int | None = Field(default=None, description="Output width/height in px; overrides design.size")
    margin_modules: int | None = Field(
        default=None,
        alias="marginModules",
        description="Quiet zone in modules; overrides design.margin",
    )

    def options(self) -> dict[str, Any]:
        return {"size": self.size, "marginModules": self.margin_modules}


class PreviewRequest(GenerateRequest):
    size: int | None = Field(default=None, description="Output size in px; defaults to the preview size")


class BatchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[GenerateRequest] = Field(..., description="QR codes to render, in order")
    stop_on_error: bool = Field(
        default=False,
        alias="stopOnError",
        description="Abort the remaining items after the first failure",
    )


class ValidateRequest(BaseModel):
    type: str | None = Field(default=None, description="Payload type")
    data: Any = Field(default=None, description="Payload data")
    design: Any = Field(default=None, description="Design configuration to check")
