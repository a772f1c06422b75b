"""POST /api/contour — simplified outline of a cut-out subject."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from foodjournal.api.uploads import check_payload_size
from foodjournal.config import Settings
from foodjournal.dependencies import get_settings
from foodjournal.engine.contour import extract_contour
from foodjournal.models.requests import ContourRequest
from foodjournal.models.responses import ERROR_RESPONSES, ContourResponse

router = APIRouter()


@router.post("/contour", response_model=ContourResponse, responses=ERROR_RESPONSES)
def subject_contour(
    req: ContourRequest,
    settings: Settings = Depends(get_settings),
) -> ContourResponse:
    check_payload_size(req.image, settings)
    points = extract_contour(
        req.image,
        threshold=req.threshold,
        max_points=req.max_points,
        tolerance=req.tolerance,
    )
    return ContourResponse(
        points=[(round(float(x), 2), round(float(y), 2)) for x, y in points],
        count=len(points),
    )
