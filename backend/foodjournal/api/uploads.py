"""Shared request guards for endpoints that accept an image payload."""

from __future__ import annotations

from fastapi import HTTPException

from foodjournal.config import Settings
from foodjournal.utils.imaging import estimated_payload_bytes


def check_payload_size(image: str, settings: Settings) -> None:
    size = estimated_payload_bytes(image)
    if size > settings.max_image_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Image is {size} bytes; limit is {settings.max_image_bytes}",
        )
