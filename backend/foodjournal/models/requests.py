"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_IMAGE_DESCRIPTION = "Base64 PNG or data:image/...;base64, URL with an alpha channel"


class _Options(BaseModel):
    """Option keys accept camelCase (gapPx) or snake_case (gap_px)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class BorderOptions(_Options):
    color: str | None = Field(default=None, description="Border colour, e.g. #ffffff")
    gap_px: float | None = Field(default=None, description="Subject edge to inner ring edge")
    stroke_px: float | None = Field(default=None, description="Ring thickness")
    line_length_range: tuple[float, float] | None = None
    dot_size_range: tuple[float, float] | None = None
    spacing: float | None = None
    jitter_amount: float | None = None
    dot_ratio: float | None = None
    expansion: str | None = Field(default=None, description="scale or distance")
    seed: int | None = Field(default=None, description="Fix the stipple layout")


class FrameOptions(_Options):
    color: str | None = None
    dashed: bool | None = None
    dash_pattern: tuple[float, float] | None = None
    line_width_variation: tuple[float, float] | None = None
    opacity_variation: tuple[float, float] | None = None
    jitter_amount: float | None = None
    padding: int | None = None
    seed: int | None = None


class BorderRequest(BaseModel):
    image: str = Field(..., description=_IMAGE_DESCRIPTION)
    options: BorderOptions = Field(default_factory=BorderOptions)


class FrameRequest(BaseModel):
    image: str = Field(..., description=_IMAGE_DESCRIPTION)
    options: FrameOptions = Field(default_factory=FrameOptions)


class ContourRequest(BaseModel):
    image: str = Field(..., description=_IMAGE_DESCRIPTION)
    threshold: float = Field(default=128, description="Alpha level treated as the edge")
    max_points: int = Field(default=500, description="Thin the raw contour to this many points")
    tolerance: float = Field(default=8.0, description="RDP simplification tolerance (px)")
