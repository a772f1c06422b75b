"""PNG encoding helpers for the HTTP layer."""

from __future__ import annotations

import base64
import io

from PIL import Image

_DATA_URL_PREFIX = "data:image/png;base64,"


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(image: Image.Image) -> str:
    """RGBA image -> ``data:image/png;base64,...``."""
    return _DATA_URL_PREFIX + base64.b64encode(encode_png(image)).decode("ascii")


def estimated_payload_bytes(payload: str) -> int:
    """Decoded size of a base64 string or data URL, without decoding it."""
    _, sep, body = payload.partition(",")
    if not sep or not payload.startswith("data:"):
        body = payload
    body = body.strip()
    return len(body) * 3 // 4 - body.count("=", max(0, len(body) - 2))
