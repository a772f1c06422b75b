"""Shared test fixtures — synthetic cut-out images."""

from __future__ import annotations

import base64
import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image

# Tomato-ish subject colour
SUBJECT_RGB = (214, 72, 54)


def _rgba_from_mask(mask: np.ndarray, rgb: tuple[int, int, int] = SUBJECT_RGB) -> Image.Image:
    h, w = mask.shape
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[mask] = (*rgb, 255)
    return Image.fromarray(arr)


def make_disc(size: int = 200, radius: int = 80) -> Image.Image:
    """Opaque disc centred in a transparent square."""
    yy, xx = np.mgrid[0:size, 0:size]
    c = size // 2
    return _rgba_from_mask((xx - c) ** 2 + (yy - c) ** 2 <= radius**2)


def make_square(size: int = 120, side: int = 60) -> Image.Image:
    mask = np.zeros((size, size), dtype=bool)
    lo = (size - side) // 2
    mask[lo : lo + side, lo : lo + side] = True
    return _rgba_from_mask(mask)


def make_l_shape(size: int = 160) -> Image.Image:
    """Concave L: vertical bar plus a foot, bbox centre falls outside the shape."""
    mask = np.zeros((size, size), dtype=bool)
    mask[20:140, 20:60] = True
    mask[100:140, 20:140] = True
    return _rgba_from_mask(mask)


def make_opaque_rect(width: int = 120, height: int = 80) -> Image.Image:
    """No transparency at all."""
    return Image.new("RGBA", (width, height), (*SUBJECT_RGB, 255))


def make_transparent(width: int = 50, height: int = 50) -> Image.Image:
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def png_header(width: int, height: int) -> bytes:
    """PNG signature plus IHDR and IEND only: claims a size, carries no pixels."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")


def data_url(image: Image.Image) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(image)).decode("ascii")


def decode_data_url(url: str) -> Image.Image:
    _, _, payload = url.partition(",")
    return Image.open(io.BytesIO(base64.b64decode(payload)))


SHAPES = {
    "disc": make_disc,
    "square": make_square,
    "l_shape": make_l_shape,
}


@pytest.fixture
def disc_image() -> Image.Image:
    return make_disc()


@pytest.fixture
def square_image() -> Image.Image:
    return make_square()


@pytest.fixture
def l_image() -> Image.Image:
    return make_l_shape()


@pytest.fixture
def opaque_image() -> Image.Image:
    return make_opaque_rect()
