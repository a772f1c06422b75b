"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from foodjournal.config import settings
from foodjournal.engine.errors import BorderError
from foodjournal.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.foodjournal_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)

# Engine error kind -> HTTP status
_ERROR_STATUS = {
    "decode_error": 400,
    "config_error": 422,
    "geometry_error": 422,
    "render_error": 500,
    "timeout": 504,
}


async def _border_error_handler(request: Request, exc: BorderError) -> JSONResponse:
    status = _ERROR_STATUS.get(exc.kind, 500)
    logger.info("%s %s -> %d %s: %s", request.method, request.url.path, status, exc.kind, exc)
    body = ErrorResponse(error=exc.kind, message=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Food Journal",
        description="Hand-drawn contour borders for cut-out food photos",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BorderError, _border_error_handler)

    from foodjournal.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
