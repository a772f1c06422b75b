"""Food journal border engine."""

from foodjournal.engine.border import BorderResult, build_contour_border, generate_contour_border
from foodjournal.engine.config import BorderConfig, HandDrawnFrameConfig
from foodjournal.engine.contour import extract_contour
from foodjournal.engine.errors import (
    BorderConfigError,
    BorderError,
    BorderTimeoutError,
    DecodeError,
    GeometryError,
    RenderError,
)
from foodjournal.engine.frame import apply_hand_drawn_frame
