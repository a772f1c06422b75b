"""Alpha mask extraction — decode a cut-out image and read its occupancy."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from foodjournal.engine.errors import DecodeError

logger = logging.getLogger(__name__)

ImageSource = Image.Image | bytes | str

# Largest source accepted; the working canvas is about four times this
MAX_SOURCE_PIXELS = 25_000_000


@dataclass
class SubjectMask:
    """Occupancy of the subject: alpha > 0 means inside the shape."""

    width: int
    height: int
    alpha: NDArray[np.uint8]
    has_transparency: bool
    # Occupied pixels' box: (x, y, w, h). Whole image when fully opaque.
    bbox: tuple[int, int, int, int]

    @property
    def is_empty(self) -> bool:
        return not bool(np.any(self.alpha))


def _decode_base64(text: str) -> bytes:
    """Accept a bare base64 payload or a ``data:image/...;base64,`` URL."""
    payload = text.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if ";base64" not in header:
            raise DecodeError("Only base64 data URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 image payload: {e}") from e


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has zero size: {width}x{height}")
    if width * height > MAX_SOURCE_PIXELS:
        raise DecodeError(
            f"Image is {width}x{height}; limit is {MAX_SOURCE_PIXELS} pixels"
        )


def decode_image(source: ImageSource) -> Image.Image:
    """Return the source as an RGBA image, decoding bytes/base64 when needed.

    The size is checked from the header before any pixel data is decoded.
    """
    if isinstance(source, Image.Image):
        image = source
        _check_size(*image.size)
    else:
        data = _decode_base64(source) if isinstance(source, str) else source
        try:
            image = Image.open(io.BytesIO(data))
            _check_size(*image.size)
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError(f"Could not decode image: {e}") from e

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


def extract_alpha(image: Image.Image) -> SubjectMask:
    """Read the alpha channel of an RGBA image into a SubjectMask."""
    alpha = np.array(image.getchannel("A"), dtype=np.uint8)
    height, width = alpha.shape
    has_transparency = bool(np.any(alpha < 255))

    occupied = alpha > 0
    if occupied.any():
        rows = np.flatnonzero(occupied.any(axis=1))
        cols = np.flatnonzero(occupied.any(axis=0))
        bbox = (
            int(cols[0]),
            int(rows[0]),
            int(cols[-1] - cols[0] + 1),
            int(rows[-1] - rows[0] + 1),
        )
    else:
        bbox = (0, 0, width, height)

    logger.debug(
        "Alpha mask %dx%d, transparent=%s, bbox=%s",
        width, height, has_transparency, bbox,
    )
    return SubjectMask(
        width=width,
        height=height,
        alpha=alpha,
        has_transparency=has_transparency,
        bbox=bbox,
    )
