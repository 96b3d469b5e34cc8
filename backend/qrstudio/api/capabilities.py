"""GET /api/qr/capabilities: supported types, shapes and limits."""

from __future__ import annotations

from fastapi import APIRouter

from qrstudio.engine.capabilities import capabilities as engine_capabilities
from qrstudio.models.responses import CapabilitiesResponse

router = APIRouter(prefix="/qr")


@router.get("/capabilities", response_model=CapabilitiesResponse)
async def capabilities() -> CapabilitiesResponse:
    return CapabilitiesResponse.model_validate(engine_capabilities())
