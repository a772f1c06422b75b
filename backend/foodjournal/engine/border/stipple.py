"""Stipple rendering — break a solid ring into hand-drawn dots and short dashes.

Pipeline:
  1. Sample the ring on a coarse grid (~200 samples across the short side)
  2. Paint random dots / round-capped dashes near sampled ring points onto
     a stencil
  3. Keep the ring only where the stencil is opaque (destination-in), so no
     mark ever leaves the band

Placement is random per call unless ``BorderConfig.seed`` is set.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

from foodjournal.engine.config import DEFAULT_SPACING, BorderConfig

logger = logging.getLogger(__name__)

# Dash width as a fraction of the ring stroke
_DASH_WIDTH_MIN = 0.6
_DASH_WIDTH_MAX = 1.2

_STENCIL_ON = 255


@dataclass
class StippleStats:
    """Counts from one stipple pass."""

    stride: int = 0
    n_candidates: int = 0
    n_planned: int = 0
    n_dots: int = 0
    n_dashes: int = 0
    n_skipped: int = 0  # anchor off-canvas or zero-size primitive

    @property
    def n_drawn(self) -> int:
        return self.n_dots + self.n_dashes


def sampling_stride(width: int, height: int, config: BorderConfig) -> int:
    return max(config.min_sample_stride, min(width, height) // config.sample_grid)


def ring_candidates(alpha: NDArray[np.uint8], stride: int) -> NDArray[np.float64]:
    """Grid points (x, y) every ``stride`` px where the ring is present."""
    rows, cols = np.nonzero(alpha[::stride, ::stride] > 0)
    return np.column_stack([cols * stride, rows * stride]).astype(np.float64)


def primitive_count(n_candidates: int, config: BorderConfig) -> int:
    scaled = n_candidates * config.density * DEFAULT_SPACING / config.spacing
    return max(config.min_primitives, int(scaled))


def _draw_dot(draw: ImageDraw.ImageDraw, x: float, y: float, r: float) -> bool:
    if r <= 0:
        return False
    draw.ellipse([x - r, y - r, x + r, y + r], fill=_STENCIL_ON)
    return True


def _draw_dash(
    draw: ImageDraw.ImageDraw,
    p0: tuple[float, float],
    p1: tuple[float, float],
    width: float,
) -> bool:
    if width <= 0 or math.dist(p0, p1) <= 0:
        return False
    draw.line([p0, p1], fill=_STENCIL_ON, width=max(1, int(round(width))))
    # Round caps
    r = width / 2
    for cx, cy in (p0, p1):
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=_STENCIL_ON)
    return True


def paint_stencil(
    size: tuple[int, int],
    candidates: NDArray[np.float64],
    stride: int,
    config: BorderConfig,
    rng: np.random.Generator,
) -> tuple[Image.Image, StippleStats]:
    """Paint random primitives anchored near ``candidates`` onto an L-mode stencil."""
    w, h = size
    count = primitive_count(len(candidates), config)
    stats = StippleStats(stride=stride, n_candidates=len(candidates), n_planned=count)

    stencil = Image.new("L", (w, h), 0)
    draw = ImageDraw.Draw(stencil)

    anchors = candidates[rng.integers(0, len(candidates), count)]
    anchors = anchors + (rng.random((count, 2)) - 0.5) * stride * 2
    jitter = (rng.random((count, 2)) - 0.5) * config.jitter_amount * 2
    is_dot = rng.random(count) < config.dot_ratio
    radii = rng.uniform(*config.dot_size_range, count) / 2
    lengths = rng.uniform(*config.line_length_range, count)
    angles = rng.random(count) * 2 * math.pi
    widths = rng.uniform(
        config.stroke_px * _DASH_WIDTH_MIN, config.stroke_px * _DASH_WIDTH_MAX, count
    )

    for i in range(count):
        x, y = anchors[i]
        if x < 0 or x >= w or y < 0 or y >= h:
            stats.n_skipped += 1
            continue
        jx, jy = jitter[i]

        if is_dot[i]:
            if _draw_dot(draw, x + jx, y + jy, radii[i]):
                stats.n_dots += 1
            else:
                stats.n_skipped += 1
            continue

        dx = math.cos(angles[i]) * lengths[i] * 0.5
        dy = math.sin(angles[i]) * lengths[i] * 0.5
        p0 = (x - dx + jx, y - dy + jy)
        p1 = (x + dx + jx, y + dy + jy)
        if _draw_dash(draw, p0, p1, widths[i]):
            stats.n_dashes += 1
        else:
            stats.n_skipped += 1

    return stencil, stats


def stipple_ring(
    ring: NDArray[np.uint8],
    config: BorderConfig,
    rng: np.random.Generator | None = None,
) -> tuple[NDArray[np.uint8], StippleStats]:
    """Return the ring reduced to stipple marks, plus stats.

    ``ring`` is an HxWx4 RGBA layer. If it holds no sampled pixels it is
    returned unchanged.
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    h, w = ring.shape[:2]
    stride = sampling_stride(w, h, config)
    candidates = ring_candidates(ring[..., 3], stride)

    if len(candidates) == 0:
        logger.warning("No ring pixels found at stride %d; skipping stipple pass", stride)
        return ring.copy(), StippleStats(stride=stride)

    stencil, stats = paint_stencil((w, h), candidates, stride, config, rng)

    # destination-in: ring alpha scaled by stencil alpha
    keep = np.asarray(stencil, dtype=np.uint16)
    out = ring.copy()
    out[..., 3] = (ring[..., 3].astype(np.uint16) * keep // 255).astype(np.uint8)
    out[out[..., 3] == 0] = 0

    logger.debug(
        "Stipple: %d candidates (stride %d), %d planned, %d dots, %d dashes, %d skipped",
        stats.n_candidates, stride, stats.n_planned,
        stats.n_dots, stats.n_dashes, stats.n_skipped,
    )
    return out, stats
