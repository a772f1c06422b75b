"""Rectangular hand-drawn frame around a whole image.

Each side is a wobbly polyline: evenly spaced points between two corners are
jittered, joined with quadratic midpoint curves, optionally dashed, and drawn
with its own random width and opacity.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from PIL import Image, ImageDraw

from foodjournal.engine.border.mask import ImageSource, decode_image
from foodjournal.engine.config import HandDrawnFrameConfig
from foodjournal.engine.errors import RenderError

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Samples per quadratic segment when flattening the smoothed path
_CURVE_STEPS = 8


def side_points(
    start: Point,
    end: Point,
    n: int,
    jitter: float,
    rng: np.random.Generator,
) -> list[Point]:
    """Endpoints fixed, ``n - 1`` interior points jittered by up to ``jitter``."""
    points = [start]
    for i in range(1, n):
        t = i / n
        x = start[0] + (end[0] - start[0]) * t + rng.uniform(-jitter, jitter)
        y = start[1] + (end[1] - start[1]) * t + rng.uniform(-jitter, jitter)
        points.append((x, y))
    points.append(end)
    return points


def smooth_path(points: list[Point]) -> list[Point]:
    """Flatten a quadratic-midpoint spline through ``points`` into a polyline."""
    if len(points) <= 2:
        return list(points)

    path = [points[0]]
    current = points[0]
    for i in range(1, len(points) - 1):
        ctrl = points[i]
        nxt = points[i + 1]
        target = ((ctrl[0] + nxt[0]) / 2, (ctrl[1] + nxt[1]) / 2)
        for step in range(1, _CURVE_STEPS + 1):
            t = step / _CURVE_STEPS
            u = 1 - t
            path.append((
                u * u * current[0] + 2 * u * t * ctrl[0] + t * t * target[0],
                u * u * current[1] + 2 * u * t * ctrl[1] + t * t * target[1],
            ))
        current = target
    path.append(points[-1])
    return path


def dash_polyline(path: list[Point], on: float, off: float) -> list[list[Point]]:
    """Split a polyline into visible runs following an (on, off) length pattern."""
    if off <= 0 or len(path) < 2:
        return [list(path)]
    if on <= 0:
        return []

    runs: list[list[Point]] = []
    current: list[Point] = [path[0]]
    drawing = True
    remaining = on

    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        seg_len = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while seg_len - pos > remaining:
            pos += remaining
            t = pos / seg_len
            pt = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            if drawing:
                current.append(pt)
                runs.append(current)
            else:
                current = [pt]
            drawing = not drawing
            remaining = on if drawing else off
        remaining -= seg_len - pos
        if drawing:
            current.append((x1, y1))

    if drawing and len(current) > 1:
        runs.append(current)
    return runs


def apply_hand_drawn_frame(
    source: ImageSource,
    config: HandDrawnFrameConfig | None = None,
) -> Image.Image:
    """Return the source on a canvas enlarged by ``2 * padding`` with a wobbly frame."""
    config = config or HandDrawnFrameConfig()
    rng = np.random.default_rng(config.seed)

    image = decode_image(source)
    w, h = image.size
    pad = config.padding

    try:
        canvas = Image.new("RGBA", (w + 2 * pad, h + 2 * pad), (0, 0, 0, 0))
    except MemoryError as e:
        raise RenderError(f"Could not allocate a {w + 2 * pad}x{h + 2 * pad} canvas") from e
    canvas.paste(image, (pad, pad))

    top_left = (pad, pad)
    top_right = (w + pad, pad)
    bottom_right = (w + pad, h + pad)
    bottom_left = (pad, h + pad)
    sides = [
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_right, bottom_left),
        (bottom_left, top_left),
    ]

    r, g, b, a = config.rgba
    on, off = config.dash_pattern
    for start, end in sides:
        pts = side_points(start, end, config.points_per_side, config.jitter_amount, rng)
        path = smooth_path(pts)
        runs = dash_polyline(path, on, off) if config.dashed else [path]

        width = rng.uniform(*config.line_width_variation)
        opacity = rng.uniform(*config.opacity_variation)
        fill = (r, g, b, int(round(a * opacity)))

        # One layer per side so its opacity composites instead of overwriting
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for run in runs:
            draw.line(run, fill=fill, width=max(1, int(round(width))), joint="curve")
        canvas = Image.alpha_composite(canvas, layer)

    logger.debug("Hand-drawn frame %dx%d, padding=%d, dashed=%s", w, h, pad, config.dashed)
    return canvas
