"""POST /api/frame — rectangular hand-drawn frame."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from foodjournal.api.uploads import check_payload_size
from foodjournal.config import Settings
from foodjournal.dependencies import get_settings
from foodjournal.engine.config import HandDrawnFrameConfig
from foodjournal.engine.frame import apply_hand_drawn_frame
from foodjournal.models.requests import FrameRequest
from foodjournal.models.responses import ERROR_RESPONSES, FrameResponse
from foodjournal.utils.imaging import to_data_url

router = APIRouter()


@router.post("/frame", response_model=FrameResponse, responses=ERROR_RESPONSES)
def hand_drawn_frame(
    req: FrameRequest,
    settings: Settings = Depends(get_settings),
) -> FrameResponse:
    check_payload_size(req.image, settings)
    config = HandDrawnFrameConfig.from_options(req.options.model_dump(exclude_none=True))

    image = apply_hand_drawn_frame(req.image, config)
    return FrameResponse(image=to_data_url(image), width=image.width, height=image.height)
