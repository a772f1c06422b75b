"""Tests for the rectangular hand-drawn frame."""

from __future__ import annotations

import math

import numpy as np
import pytest

from foodjournal.engine.config import HandDrawnFrameConfig
from foodjournal.engine.frame import apply_hand_drawn_frame, dash_polyline, side_points, smooth_path
from tests.conftest import make_opaque_rect, make_transparent


def _run_length(run):
    return sum(math.dist(a, b) for a, b in zip(run, run[1:]))


class TestPathHelpers:
    def test_side_points_keep_endpoints(self):
        rng = np.random.default_rng(0)
        pts = side_points((0, 0), (100, 0), 8, 2.0, rng)
        assert len(pts) == 9
        assert pts[0] == (0, 0) and pts[-1] == (100, 0)
        assert all(abs(y) <= 2.0 for _, y in pts)

    def test_smooth_path_keeps_endpoints(self):
        pts = [(0, 0), (10, 5), (20, -5), (30, 0)]
        path = smooth_path(pts)
        assert path[0] == (0, 0)
        assert path[-1] == (30, 0)
        assert len(path) > len(pts)

    def test_dash_pattern_lengths(self):
        runs = dash_polyline([(0, 0), (40, 0)], on=5, off=3)
        assert len(runs) == 5
        for run in runs:
            assert _run_length(run) == pytest.approx(5)
        assert runs[1][0][0] == pytest.approx(8)

    def test_dashes_continue_across_vertices(self):
        runs = dash_polyline([(0, 0), (3, 0), (3, 4)], on=5, off=100)
        assert len(runs) == 1
        assert _run_length(runs[0]) == pytest.approx(5)

    def test_no_gap_means_solid(self):
        path = [(0, 0), (10, 0)]
        assert dash_polyline(path, on=5, off=0) == [path]


class TestApplyHandDrawnFrame:
    def test_canvas_grows_by_padding(self):
        out = apply_hand_drawn_frame(make_opaque_rect(120, 80), HandDrawnFrameConfig(padding=10))
        assert out.size == (140, 100)
        assert out.mode == "RGBA"

    def test_interior_is_untouched(self):
        src = make_opaque_rect(120, 80)
        out = np.array(apply_hand_drawn_frame(src, HandDrawnFrameConfig(padding=10)))
        assert tuple(out[50, 70]) == tuple(np.array(src)[40, 60])

    def test_frame_is_drawn_on_all_sides(self):
        cfg = HandDrawnFrameConfig(padding=10, dashed=False, color="#00ff00")
        out = np.array(apply_hand_drawn_frame(make_transparent(100, 60), cfg))
        alpha = out[..., 3]
        assert alpha[5:15, 30:90].any()  # top edge at y=10
        assert alpha[65:75, 30:90].any()  # bottom edge at y=70
        assert alpha[15:55, 5:15].any()  # left edge at x=10
        assert alpha[15:55, 105:115].any()  # right edge at x=110
        assert not alpha[30:40, 40:70].any()

    def test_dashed_covers_less_than_solid(self):
        src = make_transparent(100, 60)
        solid = np.array(apply_hand_drawn_frame(src, HandDrawnFrameConfig(dashed=False, seed=1)))
        dashed = np.array(apply_hand_drawn_frame(src, HandDrawnFrameConfig(dashed=True, seed=1)))
        assert 0 < np.count_nonzero(dashed[..., 3]) < np.count_nonzero(solid[..., 3])

    def test_opacity_bounds_alpha(self):
        cfg = HandDrawnFrameConfig(opacity_variation=(0.5, 0.5), dashed=False)
        out = np.array(apply_hand_drawn_frame(make_transparent(80, 80), cfg))
        top = out[:20, 30:90, 3]  # one side only, corners overlap
        drawn = top[top > 0]
        assert drawn.max() <= 128

    def test_seed_is_reproducible(self):
        src = make_opaque_rect(60, 60)
        a = apply_hand_drawn_frame(src, HandDrawnFrameConfig(seed=5))
        b = apply_hand_drawn_frame(src, HandDrawnFrameConfig(seed=5))
        assert a.tobytes() == b.tobytes()
