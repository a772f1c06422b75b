"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from foodjournal.api import border, contour, frame, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(border.router)
api_router.include_router(frame.router)
api_router.include_router(contour.router)
