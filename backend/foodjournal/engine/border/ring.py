"""Ring compositing — outer silhouette minus inner silhouette, flooded with the border colour."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from foodjournal.engine.border.expand import Silhouette

logger = logging.getLogger(__name__)


def ring_mask(outer: Silhouette, inner: Silhouette) -> NDArray[np.bool_]:
    """Pixels covered by ``outer`` and not by ``inner``."""
    if outer.alpha.shape != inner.alpha.shape:
        raise ValueError(
            f"Silhouettes differ in size: {outer.alpha.shape} vs {inner.alpha.shape}"
        )
    return (outer.alpha > 0) & (inner.alpha == 0)


def fill_ring(
    mask: NDArray[np.bool_],
    color: tuple[int, int, int, int],
) -> NDArray[np.uint8]:
    """RGBA layer carrying ``color`` inside the band, fully transparent elsewhere.

    The subject's own colours never reach the band. An empty mask yields a
    fully transparent layer.
    """
    h, w = mask.shape
    layer = np.zeros((h, w, 4), dtype=np.uint8)
    layer[mask] = color

    n = int(mask.sum())
    if n == 0:
        logger.info("Ring is empty (stroke rounds to zero pixels or subject is empty)")
    else:
        logger.debug("Ring covers %d px", n)
    return layer


def build_ring(
    outer: Silhouette,
    inner: Silhouette,
    color: tuple[int, int, int, int],
) -> NDArray[np.uint8]:
    return fill_ring(ring_mask(outer, inner), color)
