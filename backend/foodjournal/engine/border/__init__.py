"""Contour border pipeline -- cut-out image to hand-drawn dotted/dashed border.

Stages:
  1. Mask -- decode the source and read its alpha occupancy
  2. Expand -- inner silhouette (gap) then outer silhouette (stroke)
  3. Ring -- outer minus inner, flooded with the border colour
  4. Stipple -- dots and dashes clipped to the ring
  5. Compose -- subject beneath the stippled ring on the working canvas

Pure function of its inputs: every canvas is allocated per call and nothing
outside the call is mutated, so an abandoned call leaves no trace.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from foodjournal.engine.border.compose import compose_frame
from foodjournal.engine.border.expand import (
    CanvasLayout,
    Silhouette,
    expand_ring_bounds,
    place_silhouette,
    working_canvas,
)
from foodjournal.engine.border.mask import ImageSource, decode_image, extract_alpha
from foodjournal.engine.border.ring import build_ring
from foodjournal.engine.border.stipple import StippleStats, stipple_ring
from foodjournal.engine.config import BorderConfig
from foodjournal.engine.errors import RenderError

logger = logging.getLogger(__name__)


@dataclass
class BorderResult:
    """Composed image plus the intermediate rasters that produced it."""

    image: Image.Image
    layout: CanvasLayout
    inner: Silhouette
    outer: Silhouette
    ring: NDArray[np.uint8]  # solid band, RGBA
    stippled: NDArray[np.uint8]  # band after stippling, RGBA
    stats: StippleStats = field(default_factory=StippleStats)
    elapsed_ms: float = 0.0

    @property
    def ring_pixels(self) -> int:
        return int(np.count_nonzero(self.ring[..., 3]))

    @property
    def stippled_pixels(self) -> int:
        return int(np.count_nonzero(self.stippled[..., 3]))


def build_contour_border(
    source: ImageSource,
    config: BorderConfig | None = None,
) -> BorderResult:
    """Run all five stages and keep the intermediates."""
    config = config or BorderConfig()
    start = time.perf_counter()

    # Stage 1: Mask
    subject = decode_image(source)
    mask = extract_alpha(subject)

    # Stage 2: Expand
    layout = working_canvas(mask.width, mask.height, config.reach_px)
    try:
        base = place_silhouette(mask, layout)
        inner, outer = expand_ring_bounds(base, config.gap_px, config.stroke_px, config.expansion)
    except MemoryError as e:
        raise RenderError(
            f"Could not allocate a {layout.width}x{layout.height} working canvas"
        ) from e

    # Stages 3-5: Ring, Stipple, Compose
    try:
        ring = build_ring(outer, inner, config.rgba)
        stippled, stats = stipple_ring(ring, config)
        image = compose_frame(subject, layout, stippled)
    except (MemoryError, ValueError, OSError) as e:
        raise RenderError(f"Border rendering failed: {e}") from e

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Contour border %dx%d -> %dx%d (gap=%s, stroke=%s): %d marks in %.0fms",
        mask.width, mask.height, layout.width, layout.height,
        config.gap_px, config.stroke_px, stats.n_drawn, elapsed,
    )
    return BorderResult(
        image=image,
        layout=layout,
        inner=inner,
        outer=outer,
        ring=ring,
        stippled=stippled,
        stats=stats,
        elapsed_ms=round(elapsed, 1),
    )


def generate_contour_border(
    source: ImageSource,
    config: BorderConfig | None = None,
) -> Image.Image:
    """Public entry point: cut-out image in, bordered RGBA image out.

    The output is the working canvas (at least twice the source size); it is
    not cropped to the border.
    """
    return build_contour_border(source, config).image
