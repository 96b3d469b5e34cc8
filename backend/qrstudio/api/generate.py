"""POST /api/qr/{generate,preview,batch}: SVG rendering."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from qrstudio.config import Settings
from qrstudio.dependencies import get_generator, get_settings
from qrstudio.engine.generator import GenerationResult, QrGenerator
from qrstudio.errors import QrStudioError, ValidationError
from qrstudio.models.requests import BatchRequest, GenerateRequest, PreviewRequest
from qrstudio.models.responses import BatchItemResult, BatchResponse, GenerateResponse, QrMeta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qr")


async def _render(generator: QrGenerator, req: GenerateRequest, options: dict[str, Any]) -> GenerationResult:
    # Logo fetches are blocking I/O.
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, generator.generate, req.type, req.data, req.design, options)


def _to_response(result: GenerationResult) -> GenerateResponse:
    return GenerateResponse(
        svg=result.svg,
        data_uri=result.data_uri,
        meta=QrMeta.model_validate(result.meta),
        warnings=result.warnings,
        errors=result.errors,
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    req: GenerateRequest,
    generator: QrGenerator = Depends(get_generator),
) -> GenerateResponse:
    result = await _render(generator, req, req.options())
    return _to_response(result)


@router.post("/preview")
async def preview(
    req: PreviewRequest,
    generator: QrGenerator = Depends(get_generator),
) -> Response:
    options = req.options()
    if options["size"] is None:
        options["size"] = generator.config.preview_size
    result = await _render(generator, req, options)
    return Response(content=result.svg, media_type="image/svg+xml")


@router.post("/batch", response_model=BatchResponse)
async def batch(
    req: BatchRequest,
    generator: QrGenerator = Depends(get_generator),
    settings: Settings = Depends(get_settings),
) -> BatchResponse:
    if len(req.items) > settings.batch_limit:
        raise ValidationError([{
            "field": "items",
            "message": f"Batch is limited to {settings.batch_limit} items, got {len(req.items)}",
        }])

    response = BatchResponse()
    for index, item in enumerate(req.items):
        try:
            result = await _render(generator, item, item.options())
        except QrStudioError as e:
            logger.warning("Batch item %d failed: %s", index, e)
            response.results.append(BatchItemResult(index=index, success=False, error=str(e)))
            response.failed += 1
            if req.stop_on_error:
                break
            continue
        response.results.append(BatchItemResult(index=index, success=True, result=_to_response(result)))
        response.succeeded += 1
    return response
