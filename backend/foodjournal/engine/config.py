"""Border configuration — value objects controlling the contour and frame renderers."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from PIL import ImageColor

from foodjournal.engine.errors import BorderConfigError

Color = str | tuple[int, ...]

_EXPANSION_METHODS = ("scale", "distance")

# Spacing at which `density` applies unchanged. Larger spacing -> sparser marks.
DEFAULT_SPACING = 12.0

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def parse_color(color: Color) -> tuple[int, int, int, int]:
    """Resolve a colour string or tuple into an RGBA 4-tuple."""
    if isinstance(color, str):
        try:
            rgb = ImageColor.getrgb(color)
        except ValueError as e:
            raise BorderConfigError(f"Unknown color: {color!r}") from e
    else:
        try:
            rgb = tuple(int(c) for c in color)
        except (TypeError, ValueError, OverflowError) as e:
            raise BorderConfigError(f"Unknown color: {color!r}") from e
    if len(rgb) == 3:
        rgb = (*rgb, 255)
    if len(rgb) != 4 or any(not 0 <= c <= 255 for c in rgb):
        raise BorderConfigError(f"Color must be RGB or RGBA with 0-255 channels, got {color!r}")
    return rgb  # type: ignore[return-value]


def _number(name: str, value: Any, kind: type = float) -> float:
    """Coerce an option to a finite number of ``kind``."""
    try:
        number = kind(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise BorderConfigError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise BorderConfigError(f"{name} must be finite, got {value!r}")
    return number


def _set_numbers(config: Any, names: tuple[str, ...], kind: type = float) -> None:
    # Frozen: normalise through object.__setattr__
    for name in names:
        object.__setattr__(config, name, _number(name, getattr(config, name), kind))


def _check_pair(name: str, value: Any) -> tuple[float, float]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 2:
        raise BorderConfigError(f"{name} must be a pair of numbers, got {value!r}")
    return (_number(name, value[0]), _number(name, value[1]))


def _check_range(name: str, value: tuple[float, float]) -> tuple[float, float]:
    lo, hi = _check_pair(name, value)
    if lo < 0 or hi < 0:
        raise BorderConfigError(f"{name} must be non-negative, got {value!r}")
    if lo > hi:
        raise BorderConfigError(f"{name} min > max: {value!r}")
    return (lo, hi)


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _from_mapping(cls, options: Mapping[str, Any] | None):
    if not options:
        return cls()
    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in options.items():
        name = _snake_case(key)
        if name not in known:
            raise BorderConfigError(f"Unknown option: {key}")
        if value is None and name != "seed":
            continue
        if isinstance(value, list):
            value = tuple(value)
        kwargs[name] = value
    return cls(**kwargs)


@dataclass(frozen=True)
class BorderConfig:
    """Controls the contour border: ring geometry and stipple texture."""

    color: Color = "#ffffff"

    # Ring geometry (pixels)
    gap_px: float = 10
    stroke_px: float = 5

    # Stipple primitives
    line_length_range: tuple[float, float] = (20, 40)
    dot_size_range: tuple[float, float] = (3, 5)  # diameters
    spacing: float = DEFAULT_SPACING
    jitter_amount: float = 1.5
    dot_ratio: float = 0.4  # remainder are dashes

    # Stipple density
    density: float = 0.3  # primitives per ring candidate
    min_primitives: int = 500
    sample_grid: int = 200  # ~samples across the short side
    min_sample_stride: int = 4

    # "scale" = rescale about centre, "distance" = distance-transform dilation
    expansion: str = "scale"

    seed: int | None = None

    def __post_init__(self) -> None:
        _set_numbers(self, ("gap_px", "stroke_px", "spacing", "jitter_amount", "dot_ratio", "density"))
        _set_numbers(self, ("min_primitives", "sample_grid", "min_sample_stride"), int)
        if self.seed is not None:
            _set_numbers(self, ("seed",), int)
        object.__setattr__(self, "line_length_range", _check_range("line_length_range", self.line_length_range))
        object.__setattr__(self, "dot_size_range", _check_range("dot_size_range", self.dot_size_range))
        parse_color(self.color)

        if self.gap_px < 0:
            raise BorderConfigError(f"gap_px must be >= 0, got {self.gap_px}")
        if self.stroke_px <= 0:
            raise BorderConfigError(f"stroke_px must be > 0, got {self.stroke_px}")
        if self.spacing <= 0:
            raise BorderConfigError(f"spacing must be > 0, got {self.spacing}")
        if self.jitter_amount < 0:
            raise BorderConfigError(f"jitter_amount must be >= 0, got {self.jitter_amount}")
        if not 0.0 <= self.dot_ratio <= 1.0:
            raise BorderConfigError(f"dot_ratio must be within [0, 1], got {self.dot_ratio}")
        if self.density < 0 or self.min_primitives < 0:
            raise BorderConfigError("density and min_primitives must be non-negative")
        if self.sample_grid < 1 or self.min_sample_stride < 1:
            raise BorderConfigError("sample_grid and min_sample_stride must be >= 1")
        if self.expansion not in _EXPANSION_METHODS:
            raise BorderConfigError(
                f"expansion must be one of {_EXPANSION_METHODS}, got {self.expansion!r}"
            )

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return parse_color(self.color)

    @property
    def reach_px(self) -> int:
        """Total whole-pixel distance the outer ring edge may sit from the subject."""
        return int(round(self.gap_px)) + int(round(self.stroke_px))

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> BorderConfig:
        """Build from a loose options dict; keys may be snake_case or camelCase."""
        return _from_mapping(cls, options)


@dataclass(frozen=True)
class HandDrawnFrameConfig:
    """Rectangular hand-drawn frame drawn around the whole image."""

    color: Color = "#ffffff"
    dashed: bool = True
    dash_pattern: tuple[float, float] = (5, 3)  # (on, off)
    line_width_variation: tuple[float, float] = (1, 4)
    opacity_variation: tuple[float, float] = (0.7, 1.0)
    jitter_amount: float = 2
    padding: int = 10
    points_per_side: int = 8
    seed: int | None = None

    def __post_init__(self) -> None:
        _set_numbers(self, ("jitter_amount",))
        _set_numbers(self, ("padding", "points_per_side"), int)
        if self.seed is not None:
            _set_numbers(self, ("seed",), int)
        object.__setattr__(self, "dash_pattern", _check_pair("dash_pattern", self.dash_pattern))
        object.__setattr__(self, "line_width_variation", _check_range("line_width_variation", self.line_width_variation))
        object.__setattr__(self, "opacity_variation", _check_range("opacity_variation", self.opacity_variation))
        parse_color(self.color)

        if len(self.dash_pattern) != 2 or min(self.dash_pattern) < 0 or sum(self.dash_pattern) <= 0:
            raise BorderConfigError(f"dash_pattern must be a positive (on, off) pair, got {self.dash_pattern!r}")
        if self.opacity_variation[1] > 1.0:
            raise BorderConfigError("opacity_variation must lie within [0, 1]")
        if self.padding < 0:
            raise BorderConfigError(f"padding must be >= 0, got {self.padding}")
        if self.points_per_side < 1:
            raise BorderConfigError("points_per_side must be >= 1")
        if self.jitter_amount < 0:
            raise BorderConfigError(f"jitter_amount must be >= 0, got {self.jitter_amount}")

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return parse_color(self.color)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> HandDrawnFrameConfig:
        return _from_mapping(cls, options)
