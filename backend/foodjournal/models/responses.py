"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class StippleStatsModel(BaseModel):
    stride: int = 0
    n_candidates: int = 0
    n_planned: int = 0
    n_dots: int = 0
    n_dashes: int = 0
    n_skipped: int = 0


class BorderResponse(BaseModel):
    image: str = Field(..., description="PNG data URL")
    width: int
    height: int
    offset_x: int = Field(0, description="Where the source's top-left sits on the output")
    offset_y: int = 0
    stats: StippleStatsModel = Field(default_factory=StippleStatsModel)
    processing_time_ms: float = 0.0


class FrameResponse(BaseModel):
    image: str
    width: int
    height: int


class ContourResponse(BaseModel):
    points: list[tuple[float, float]] = Field(default_factory=list)
    count: int = 0


class ErrorResponse(BaseModel):
    error: str
    message: str


# Engine failures every image endpoint can return
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Image could not be decoded"},
    422: {"model": ErrorResponse, "description": "Invalid options or geometry"},
    500: {"model": ErrorResponse, "description": "Rendering failed"},
}
