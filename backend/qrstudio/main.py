"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qrstudio.config import settings
from qrstudio.engine.capabilities import ENGINE_VERSION
from qrstudio.errors import EncodingError, ValidationError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.qrstudio_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="qrstudio",
        description="Styled QR code rendering engine: payload encoding, shaped modules, stickers, frames and logos as SVG",
        version=ENGINE_VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    _register_stages()
    _register_error_handlers(app)

    from qrstudio.api.router import api_router

    app.include_router(api_router)

    return app


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    from qrstudio.engine.pipeline import load_stages

    load_stages()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.issues})

    @app.exception_handler(EncodingError)
    async def _encoding_error(request: Request, exc: EncodingError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})


app = create_app()
