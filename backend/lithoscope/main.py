"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lithoscope.config import settings
from lithoscope.engine.errors import ConfigurationError, ImageDecodeError
from lithoscope.engine.registry import load_stages

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.lithoscope_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _image_decode_error(request: Request, exc: ImageDecodeError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "image_decode"})


async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc), "error": "configuration"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Lithoscope",
        description="River specimen analysis — cloud model with an offline heuristic fallback",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ImageDecodeError, _image_decode_error)
    app.add_exception_handler(ConfigurationError, _configuration_error)

    # Import all stage modules to trigger registration
    registry = load_stages()
    logger.debug("Registered %d analysis stages", registry.count)

    from lithoscope.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
