"""Error taxonomy for border generation.

Every failure the engine surfaces derives from BorderError and carries a
short ``kind`` string so callers (and the HTTP layer) can tell them apart.
"""

from __future__ import annotations


class BorderError(Exception):
    """Base class for all border engine failures."""

    kind = "border_error"


class DecodeError(BorderError):
    """Source image could not be decoded or has zero width/height."""

    kind = "decode_error"


class GeometryError(BorderError):
    """Computed canvas or silhouette dimensions are not renderable."""

    kind = "geometry_error"


class RenderError(BorderError):
    """Drawing or allocating a working canvas failed."""

    kind = "render_error"


class BorderTimeoutError(BorderError):
    """The caller-side wall-clock budget was exceeded."""

    kind = "timeout"


class BorderConfigError(BorderError, ValueError):
    """Invalid option values (e.g. a range with min > max)."""

    kind = "config_error"
