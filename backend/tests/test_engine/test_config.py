"""Tests for BorderConfig / HandDrawnFrameConfig validation."""

from __future__ import annotations

import pytest

from foodjournal.engine.config import BorderConfig, HandDrawnFrameConfig, parse_color
from foodjournal.engine.errors import BorderConfigError


class TestBorderConfig:
    def test_defaults(self):
        cfg = BorderConfig()
        assert cfg.rgba == (255, 255, 255, 255)
        assert (cfg.gap_px, cfg.stroke_px) == (10, 5)
        assert cfg.line_length_range == (20.0, 40.0)
        assert cfg.dot_size_range == (3.0, 5.0)
        assert cfg.spacing == 12
        assert cfg.jitter_amount == 1.5
        assert cfg.seed is None
        assert cfg.reach_px == 15

    def test_from_options_accepts_camel_case(self):
        cfg = BorderConfig.from_options(
            {"gapPx": 4, "strokePx": 2, "lineLengthRange": [5, 9], "jitterAmount": 0}
        )
        assert cfg.gap_px == 4
        assert cfg.stroke_px == 2
        assert cfg.line_length_range == (5.0, 9.0)
        assert cfg.jitter_amount == 0

    def test_from_options_accepts_snake_case_and_skips_none(self):
        cfg = BorderConfig.from_options({"dot_size_range": (1, 2), "color": None})
        assert cfg.dot_size_range == (1.0, 2.0)
        assert cfg.color == "#ffffff"

    def test_empty_options_give_defaults(self):
        assert BorderConfig.from_options(None) == BorderConfig()
        assert BorderConfig.from_options({}) == BorderConfig()

    def test_unknown_option(self):
        with pytest.raises(BorderConfigError, match="Unknown option"):
            BorderConfig.from_options({"borderScale": 1.06})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"line_length_range": (40, 20)},
            {"dot_size_range": (5, 3)},
            {"dot_size_range": (-1, 3)},
            {"line_length_range": (1, 2, 3)},
            {"gap_px": -1},
            {"stroke_px": 0},
            {"spacing": 0},
            {"jitter_amount": -0.5},
            {"dot_ratio": 1.5},
            {"min_primitives": -1},
            {"sample_grid": 0},
            {"expansion": "morph"},
            {"color": "not-a-colour"},
            {"color": (255, 0)},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(BorderConfigError):
            BorderConfig(**kwargs)

    def test_config_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            BorderConfig(stroke_px=-3)

    def test_reach_rounds_each_offset(self):
        assert BorderConfig(gap_px=2.6, stroke_px=0.4).reach_px == 3

    @pytest.mark.parametrize(
        "options",
        [
            {"gapPx": "ten"},
            {"strokePx": None, "gapPx": [1, 2]},
            {"gapPx": float("nan")},
            {"strokePx": float("inf")},
            {"minPrimitives": "many"},
            {"dotSizeRange": ["a", 3]},
            {"lineLengthRange": "20-40"},
            {"color": [255, "red", 0]},
            {"seed": "lucky"},
        ],
    )
    def test_malformed_options_are_config_errors(self, options):
        with pytest.raises(BorderConfigError):
            BorderConfig.from_options(options)

    def test_numeric_strings_are_coerced(self):
        cfg = BorderConfig.from_options({"gapPx": "4", "minPrimitives": "50"})
        assert cfg.gap_px == 4.0
        assert cfg.min_primitives == 50
        assert cfg.reach_px == 9


class TestParseColor:
    @pytest.mark.parametrize(
        "color,expected",
        [
            ("#ffffff", (255, 255, 255, 255)),
            ("white", (255, 255, 255, 255)),
            ("#ff000080", (255, 0, 0, 128)),
            ((10, 20, 30), (10, 20, 30, 255)),
            ((10, 20, 30, 40), (10, 20, 30, 40)),
        ],
    )
    def test_accepted_forms(self, color, expected):
        assert parse_color(color) == expected

    def test_out_of_range_channel(self):
        with pytest.raises(BorderConfigError):
            parse_color((300, 0, 0))


class TestHandDrawnFrameConfig:
    def test_defaults(self):
        cfg = HandDrawnFrameConfig()
        assert cfg.padding == 10
        assert cfg.dashed is True
        assert cfg.dash_pattern == (5, 3)
        assert cfg.opacity_variation == (0.7, 1.0)

    def test_from_options(self):
        cfg = HandDrawnFrameConfig.from_options({"dashPattern": [4, 4], "padding": 6})
        assert cfg.dash_pattern == (4, 4)
        assert cfg.padding == 6

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"padding": -1},
            {"dash_pattern": (0, 0)},
            {"opacity_variation": (0.5, 1.5)},
            {"line_width_variation": (4, 1)},
            {"points_per_side": 0},
            {"padding": "wide"},
            {"jitter_amount": float("nan")},
            {"dash_pattern": ("on", 3)},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(BorderConfigError):
            HandDrawnFrameConfig(**kwargs)
