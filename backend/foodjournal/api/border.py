"""POST /api/border — contour border around a cut-out image."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from foodjournal.api.uploads import check_payload_size
from foodjournal.config import Settings
from foodjournal.dependencies import get_settings
from foodjournal.engine.config import BorderConfig
from foodjournal.engine.runner import build_async
from foodjournal.models.requests import BorderRequest
from foodjournal.models.responses import ERROR_RESPONSES, BorderResponse, ErrorResponse, StippleStatsModel
from foodjournal.utils.imaging import to_data_url

router = APIRouter()


@router.post(
    "/border",
    response_model=BorderResponse,
    responses={**ERROR_RESPONSES, 504: {"model": ErrorResponse, "description": "Timed out"}},
)
async def contour_border(
    req: BorderRequest,
    settings: Settings = Depends(get_settings),
) -> BorderResponse:
    check_payload_size(req.image, settings)
    config = BorderConfig.from_options(req.options.model_dump(exclude_none=True))

    result = await build_async(req.image, config, timeout_s=settings.border_timeout_s)

    stats = result.stats
    return BorderResponse(
        image=to_data_url(result.image),
        width=result.layout.width,
        height=result.layout.height,
        offset_x=result.layout.offset_x,
        offset_y=result.layout.offset_y,
        stats=StippleStatsModel(
            stride=stats.stride,
            n_candidates=stats.n_candidates,
            n_planned=stats.n_planned,
            n_dots=stats.n_dots,
            n_dashes=stats.n_dashes,
            n_skipped=stats.n_skipped,
        ),
        processing_time_ms=result.elapsed_ms,
    )
