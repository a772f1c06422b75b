"""Frame compositing — subject image beneath the stippled ring."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from foodjournal.engine.border.expand import CanvasLayout


def compose_frame(
    subject: Image.Image,
    layout: CanvasLayout,
    stippled_ring: NDArray[np.uint8],
) -> Image.Image:
    """Draw ``subject`` at the layout offset, then the ring over it (source-over)."""
    canvas = Image.new("RGBA", (layout.width, layout.height), (0, 0, 0, 0))
    canvas.paste(subject, (layout.offset_x, layout.offset_y))
    ring = Image.fromarray(np.ascontiguousarray(stippled_ring))
    return Image.alpha_composite(canvas, ring)
