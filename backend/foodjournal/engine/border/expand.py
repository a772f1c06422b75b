"""Silhouette expansion — grow a subject mask outward by a pixel offset.

Two methods:
  scale     Crop the silhouette's box and bilinear-resample it into a box
            ``2 * offset`` larger, centred on the same point. Default.
  distance  True dilation: every pixel within ``offset`` (Euclidean) of the
            shape is inside. Slower, exact for any shape.

Known limitation of ``scale``: uniform rescale about the centre is exact for
convex and star-shaped subjects only. Elongated subjects get a thicker band
along their long axis and deep concavities are under- or over-expanded, so
the border thickness is visibly uneven there. The result is always unioned
with its source, which keeps ``outer ⊇ inner`` but does not even out the band.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from PIL import Image
from scipy.ndimage import distance_transform_edt

from foodjournal.engine.border.mask import SubjectMask
from foodjournal.engine.errors import BorderConfigError, GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasLayout:
    """Working canvas size and where the subject's top-left corner sits on it."""

    width: int
    height: int
    offset_x: int
    offset_y: int


@dataclass
class Silhouette:
    """Canvas-sized alpha array plus the (x, y, w, h) box it was scaled from/to."""

    alpha: NDArray[np.uint8]
    box: tuple[int, int, int, int]

    @property
    def coverage(self) -> NDArray[np.bool_]:
        return self.alpha > 0


def working_canvas(width: int, height: int, reach: int) -> CanvasLayout:
    """Canvas at least 2x the image and wide enough that ``reach`` px never clips."""
    if width <= 0 or height <= 0:
        raise GeometryError(f"Image dimensions must be positive, got {width}x{height}")
    if reach < 0:
        raise GeometryError(f"Expansion reach must be >= 0, got {reach}")

    pad_x = max((width + 1) // 2, reach + 1)
    pad_y = max((height + 1) // 2, reach + 1)
    layout = CanvasLayout(
        width=width + 2 * pad_x,
        height=height + 2 * pad_y,
        offset_x=pad_x,
        offset_y=pad_y,
    )
    logger.debug("Working canvas %dx%d, subject at (%d, %d)",
                 layout.width, layout.height, layout.offset_x, layout.offset_y)
    return layout


def place_silhouette(mask: SubjectMask, layout: CanvasLayout) -> Silhouette:
    """Centre the subject's alpha on an empty working canvas."""
    canvas = np.zeros((layout.height, layout.width), dtype=np.uint8)
    ox, oy = layout.offset_x, layout.offset_y
    canvas[oy : oy + mask.height, ox : ox + mask.width] = mask.alpha

    bx, by, bw, bh = mask.bbox
    return Silhouette(alpha=canvas, box=(ox + bx, oy + by, bw, bh))


def _scale_about_center(
    alpha: NDArray[np.uint8],
    box: tuple[int, int, int, int],
    new_box: tuple[int, int, int, int],
) -> NDArray[np.uint8]:
    x, y, w, h = box
    nx, ny, nw, nh = new_box
    crop = Image.fromarray(np.ascontiguousarray(alpha[y : y + h, x : x + w]))
    scaled = crop.resize((nw, nh), Image.Resampling.BILINEAR)

    out = np.zeros_like(alpha)
    out[ny : ny + nh, nx : nx + nw] = np.asarray(scaled, dtype=np.uint8)
    return out


def _dilate_distance(alpha: NDArray[np.uint8], offset: int) -> NDArray[np.uint8]:
    if not alpha.any():
        return np.zeros_like(alpha)
    # Distance from every background pixel to the nearest shape pixel
    dist = distance_transform_edt(alpha == 0)
    return np.where(dist <= offset, 255, 0).astype(np.uint8)


def expand_silhouette(
    silhouette: Silhouette,
    offset_px: float,
    method: str = "scale",
) -> Silhouette:
    """Return a new silhouette grown outward by ``offset_px`` (rounded to whole pixels).

    The result always contains the source silhouette.
    """
    offset = int(round(offset_px))
    if offset < 0:
        raise GeometryError(f"Expansion offset must be >= 0, got {offset_px}")

    x, y, w, h = silhouette.box
    new_box = (x - offset, y - offset, w + 2 * offset, h + 2 * offset)
    nx, ny, nw, nh = new_box
    if w <= 0 or h <= 0 or nw <= 0 or nh <= 0:
        raise GeometryError(f"Silhouette box must be positive, got {w}x{h} -> {nw}x{nh}")

    canvas_h, canvas_w = silhouette.alpha.shape
    if nx < 0 or ny < 0 or nx + nw > canvas_w or ny + nh > canvas_h:
        raise GeometryError(
            f"Expanded box {new_box} does not fit the {canvas_w}x{canvas_h} canvas"
        )

    if offset == 0:
        return Silhouette(alpha=silhouette.alpha.copy(), box=silhouette.box)

    if method == "scale":
        grown = _scale_about_center(silhouette.alpha, silhouette.box, new_box)
    elif method == "distance":
        grown = _dilate_distance(silhouette.alpha, offset)
    else:
        raise BorderConfigError(f"Unknown expansion method: {method!r}")

    return Silhouette(alpha=np.maximum(grown, silhouette.alpha), box=new_box)


def expand_ring_bounds(
    base: Silhouette,
    gap_px: float,
    stroke_px: float,
    method: str = "scale",
) -> tuple[Silhouette, Silhouette]:
    """Inner = base grown by gap; outer = inner grown by stroke (in that order)."""
    inner = expand_silhouette(base, gap_px, method)
    outer = expand_silhouette(inner, stroke_px, method)
    logger.debug("Expanded silhouettes: inner box=%s, outer box=%s", inner.box, outer.box)
    return inner, outer
