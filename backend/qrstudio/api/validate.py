"""POST /api/qr/validate: pre-flight checks without rendering."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from qrstudio.dependencies import get_generator
from qrstudio.engine.generator import QrGenerator
from qrstudio.models.requests import ValidateRequest
from qrstudio.models.responses import ValidateResponse

router = APIRouter(prefix="/qr")


@router.post("/validate", response_model=ValidateResponse)
async def validate(
    req: ValidateRequest,
    generator: QrGenerator = Depends(get_generator),
) -> ValidateResponse:
    report = generator.validate_design(req.type, req.data, req.design)
    return ValidateResponse.model_validate(report)
