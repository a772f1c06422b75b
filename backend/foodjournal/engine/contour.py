"""Subject outline extraction — ordered, simplified polyline around the cut-out."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from foodjournal.engine.border.mask import ImageSource, decode_image, extract_alpha
from foodjournal.engine.errors import BorderConfigError
from foodjournal.utils.contour import longest_contour, rdp_simplify, thin_points

logger = logging.getLogger(__name__)


def extract_contour(
    source: ImageSource,
    threshold: float = 128,
    max_points: int = 500,
    tolerance: float = 8.0,
) -> NDArray[np.float64]:
    """Return the subject's outer outline as an Nx2 array of (x, y).

    Marching squares on the alpha channel, thinned to ``max_points`` and
    simplified with RDP at ``tolerance`` px. Fully transparent -> (0, 2).
    """
    if not 0 <= threshold < 255:
        raise BorderConfigError(f"threshold must be within [0, 255), got {threshold}")
    if tolerance < 0:
        raise BorderConfigError(f"tolerance must be >= 0, got {tolerance}")

    mask = extract_alpha(decode_image(source))
    if mask.is_empty:
        logger.info("Fully transparent source, no contour")
        return np.empty((0, 2))

    points = longest_contour(mask.alpha, threshold)
    if len(points) == 0:
        logger.info("No contour above alpha %s", threshold)
        return points

    n_raw = len(points)
    points = thin_points(points, max_points)
    simplified = rdp_simplify(points, tolerance)

    logger.debug("Contour: %d raw -> %d thinned -> %d simplified",
                 n_raw, len(points), len(simplified))
    return simplified
