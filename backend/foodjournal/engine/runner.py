"""Caller-side time budget around border generation.

The engine itself has no cancellation points. These wrappers run it on a
worker thread and give up waiting once the budget is spent; the abandoned
call keeps running to completion but only touches its own canvases.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from functools import partial

from PIL import Image

from foodjournal.engine.border import BorderResult, build_contour_border, generate_contour_border
from foodjournal.engine.border.mask import ImageSource
from foodjournal.engine.config import BorderConfig
from foodjournal.engine.errors import BorderTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0

_TIMEOUT_MESSAGE = "Border generation exceeded {:.0f}s; try a smaller image"


def generate_with_timeout(
    source: ImageSource,
    config: BorderConfig | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Image.Image:
    """Blocking call; raises BorderTimeoutError once ``timeout_s`` elapses."""
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = executor.submit(generate_contour_border, source, config)
    try:
        return future.result(timeout=timeout_s)
    except concurrent.futures.TimeoutError as e:
        logger.warning("Border generation timed out after %.1fs", timeout_s)
        raise BorderTimeoutError(_TIMEOUT_MESSAGE.format(timeout_s)) from e
    finally:
        # Don't block on an abandoned worker
        executor.shutdown(wait=False)


async def build_async(
    source: ImageSource,
    config: BorderConfig | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> BorderResult:
    """Run on the loop's default executor, bounded by ``timeout_s``."""
    loop = asyncio.get_running_loop()
    job = loop.run_in_executor(None, partial(build_contour_border, source, config))
    try:
        return await asyncio.wait_for(job, timeout=timeout_s)
    except asyncio.TimeoutError as e:
        logger.warning("Border generation timed out after %.1fs", timeout_s)
        raise BorderTimeoutError(_TIMEOUT_MESSAGE.format(timeout_s)) from e


async def generate_async(
    source: ImageSource,
    config: BorderConfig | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Image.Image:
    result = await build_async(source, config, timeout_s)
    return result.image
