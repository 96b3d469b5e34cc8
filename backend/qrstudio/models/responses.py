"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from qrstudio.engine.capabilities import ENGINE_VERSION


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = ENGINE_VERSION
    stages_registered: int = 0


class QrMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    module_count: int = Field(..., alias="moduleCount")
    version: int
    error_correction: str = Field(..., alias="errorCorrection")
    type: str
    size: int


class GenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    svg: str
    data_uri: str = Field(..., alias="dataUri")
    meta: QrMeta
    warnings: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)


class BatchItemResult(BaseModel):
    index: int
    success: bool
    result: GenerateResponse | None = None
    error: str | None = None


class BatchResponse(BaseModel):
    results: list[BatchItemResult] = Field(default_factory=list)
    succeeded: int = 0
    failed: int = 0


class ValidationIssue(BaseModel):
    field: str
    message: str


class ValidateResponse(BaseModel):
    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)


class CapabilitiesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str
    types: list[str]
    module_shapes: list[str] = Field(..., alias="moduleShapes")
    finder_shapes: list[str] = Field(..., alias="finderShapes")
    finder_dot_shapes: list[str] = Field(..., alias="finderDotShapes")
    sticker_types: list[str] = Field(..., alias="stickerTypes")
    frame_types: list[str] = Field(..., alias="frameTypes")
    logo_background_shapes: list[str] = Field(..., alias="logoBackgroundShapes")
    error_correction: list[str] = Field(..., alias="errorCorrection")
    gradient_types: list[str] = Field(..., alias="gradientTypes")
    output: dict[str, Any] = Field(default_factory=dict)
