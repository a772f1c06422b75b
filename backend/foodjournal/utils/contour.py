"""Contour helpers — marching squares on alpha, RDP simplification."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from skimage.measure import find_contours


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Reduces point count while keeping every dropped point within ``epsilon``
    of the simplified polyline.
    """
    if len(points) <= 2:
        return points

    start = points[0]
    end = points[-1]

    seg = end - start
    seg_len_sq = float(np.dot(seg, seg))

    if seg_len_sq < 1e-20:
        # Degenerate chord (closed loop): measure from the start point
        distances = np.linalg.norm(points - start, axis=1)
    else:
        # Distance to the segment, clamped to its endpoints
        t = np.clip(np.dot(points - start, seg) / seg_len_sq, 0.0, 1.0)
        closest = start + np.outer(t, seg)
        distances = np.linalg.norm(points - closest, axis=1)

    max_idx = int(np.argmax(distances))
    if distances[max_idx] > epsilon:
        left = rdp_simplify(points[: max_idx + 1], epsilon)
        right = rdp_simplify(points[max_idx:], epsilon)
        return np.vstack([left[:-1], right])
    return points[[0, -1]]


def longest_contour(
    alpha: NDArray[np.uint8],
    threshold: float,
) -> NDArray[np.float64]:
    """Longest iso-contour of ``alpha`` at ``threshold`` as (x, y) points.

    The array is padded with one transparent pixel so shapes touching the
    image edge still produce closed contours.
    """
    padded = np.pad(alpha.astype(np.float64), 1, mode="constant", constant_values=0)
    contours = find_contours(padded, level=threshold)
    if not contours:
        return np.empty((0, 2))

    best = max(contours, key=len)
    # (row, col) in padded space -> (x, y) in image space
    return best[:, ::-1] - 1.0


def thin_points(points: NDArray[np.float64], max_points: int) -> NDArray[np.float64]:
    """Keep every k-th point so at most ``max_points`` remain."""
    if max_points <= 0 or len(points) <= max_points:
        return points
    step = int(np.ceil(len(points) / max_points))
    return points[::step]
