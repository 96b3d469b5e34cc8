"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from qrstudio.engine.capabilities import ENGINE_VERSION
from qrstudio.engine.registry import get_registry
from qrstudio.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=ENGINE_VERSION,
        stages_registered=get_registry().count,
    )
