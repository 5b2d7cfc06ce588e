"""
Unit tests for pair scoring and target selection.
"""

import math

import pytest

from vision_target.config import VisionConfig
from vision_target.scoring import (
    bounding_ratio_score,
    compute_subscores,
    contour_width_score,
    height_ratio_score,
    left_spacing_score,
    ratio_to_score,
    score_pair,
    select_best,
    top_edge_score,
    width_ratio_score,
)
from vision_target.types import BoundingPair, Rect, ScoredPair, SubScores


def _pair_with_scores(value, index1=0, index2=1):
    scores = SubScores(*([value] * 6))
    return ScoredPair(Rect(0, 0, 1, 1), Rect(2, 0, 1, 1), scores, index1, index2)


class TestRatioToScore:
    """Triangular mapping of a ratio onto [0, 100]"""

    def test_peak_and_ends(self):
        assert ratio_to_score(1.0) == 100.0
        assert ratio_to_score(0.0) == 0.0
        assert ratio_to_score(2.0) == 0.0

    @pytest.mark.parametrize("r", [0.0, 0.1, 0.25, 0.5, 0.73, 0.9, 1.0, 1.4])
    def test_symmetric_around_one(self, r):
        assert ratio_to_score(r) == pytest.approx(ratio_to_score(2.0 - r))

    @pytest.mark.parametrize("r", [-5.0, -0.01, 2.01, 3.0, 1e9])
    def test_zero_outside_band(self, r):
        assert ratio_to_score(r) == 0.0

    def test_linear_inside_band(self):
        assert ratio_to_score(0.5) == pytest.approx(50.0)
        assert ratio_to_score(1.25) == pytest.approx(75.0)

    @pytest.mark.parametrize("r", [math.nan, math.inf, -math.inf])
    def test_non_finite_scores_zero(self, r):
        assert ratio_to_score(r) == 0.0


class TestSubScores:
    """The six geometric sub-scores"""

    def setup_method(self):
        # bounding box: left=10, right=90, top=10, bottom=90
        self.r1 = Rect(10, 10, 20, 80)
        self.r2 = Rect(70, 10, 20, 80)

    def test_bounding_ratio(self):
        # 80 / (2 * 80) = 0.5
        assert bounding_ratio_score(self.r1, self.r2) == pytest.approx(50.0)

    def test_contour_width(self):
        # 20 * 4 / 80 = 1
        assert contour_width_score(self.r1, self.r2) == pytest.approx(100.0)

    def test_top_edge_level(self):
        assert top_edge_score(self.r1, self.r2) == pytest.approx(100.0)

    def test_top_edge_offset(self):
        r2 = Rect(70, 30, 20, 80)
        # bounding height 100, difference -20 -> ratio 0.8
        assert top_edge_score(self.r1, r2) == pytest.approx(80.0)

    def test_left_spacing(self):
        # 60 * 3 / (4 * 80) = 0.5625
        assert left_spacing_score(self.r1, self.r2) == pytest.approx(56.25)

    def test_width_and_height_ratio(self):
        assert width_ratio_score(self.r1, self.r2) == pytest.approx(100.0)
        assert height_ratio_score(self.r1, self.r2) == pytest.approx(100.0)
        assert width_ratio_score(Rect(0, 0, 10, 10), Rect(0, 0, 20, 10)) == pytest.approx(50.0)
        assert height_ratio_score(Rect(0, 0, 10, 30), Rect(0, 0, 10, 20)) == pytest.approx(50.0)

    def test_total_of_canonical_pair(self):
        scores = compute_subscores(self.r1, self.r2)
        assert scores.total == pytest.approx(50 + 100 + 100 + 56.25 + 100 + 100)
        assert scores.minimum == pytest.approx(50.0)

    def test_each_subscore_peaks_at_ratio_one(self):
        left = Rect(0, 0, 20, 160)
        right = Rect(60, 0, 20, 160)
        # one enclosing box cannot satisfy contour width (W = 80) and left
        # spacing (W = 45) at once, so each peak gets its own box here
        tall = BoundingPair(top=0, bottom=160, left=0, right=80)
        narrow = BoundingPair(top=0, bottom=160, left=0, right=45)
        peaks = SubScores(
            bounding_ratio=bounding_ratio_score(left, right, tall),
            contour_width=contour_width_score(left, right, tall),
            top_edge=top_edge_score(left, right, tall),
            left_spacing=left_spacing_score(left, right, narrow),
            width_ratio=width_ratio_score(left, right),
            height_ratio=height_ratio_score(left, right),
        )
        assert peaks.as_tuple() == (100.0,) * 6
        assert peaks.total == 600.0

    def test_best_reachable_geometry(self):
        # spacing ratio 1 needs the left edges 4/3 of the box width apart,
        # more than the box allows; the closest is (W - w) * 3 / 4W = 9/16
        scores = compute_subscores(Rect(0, 0, 20, 160), Rect(60, 0, 20, 160))
        assert scores.left_spacing == pytest.approx(56.25)
        assert scores.total == pytest.approx(556.25)


class TestDegenerateGeometry:
    """Zero-size geometry never yields a selectable pair"""

    def test_zero_width_rect(self):
        scores = compute_subscores(Rect(0, 0, 0, 80), Rect(60, 0, 20, 80))
        assert scores.as_tuple() == (0.0,) * 6

    def test_zero_height_rect(self):
        scores = compute_subscores(Rect(0, 0, 20, 80), Rect(60, 0, 20, 0))
        assert scores.total == 0.0

    def test_zero_denominator_in_single_subscore(self):
        assert width_ratio_score(Rect(0, 0, 10, 10), Rect(0, 0, 0, 10)) == 0.0
        assert height_ratio_score(Rect(0, 0, 10, 10), Rect(0, 0, 10, 0)) == 0.0

    def test_degenerate_pair_not_selected_even_with_zero_threshold(self):
        pair = score_pair(Rect(0, 0, 0, 0), Rect(0, 0, 0, 0))
        assert select_best([pair], VisionConfig(score_threshold=0)) is None


class TestSelectBest:
    """Selection across all pairs of a frame"""

    def test_threshold_is_strict(self):
        assert select_best([_pair_with_scores(75.0)]) is None
        assert select_best([_pair_with_scores(75.01)]) is not None

    def test_perfect_pair_wins(self):
        perfect = _pair_with_scores(100.0, 3, 4)
        best = select_best([_pair_with_scores(80.0), perfect, _pair_with_scores(90.0)])
        assert best is perfect
        assert best.total == 600.0

    def test_first_seen_wins_on_tie(self):
        first = _pair_with_scores(90.0, 0, 1)
        second = _pair_with_scores(90.0, 0, 2)
        assert select_best([first, second]) is first

    def test_nothing_above_threshold(self):
        assert select_best([_pair_with_scores(50.0), _pair_with_scores(70.0)]) is None

    def test_empty(self):
        assert select_best([]) is None

    def test_min_subscore_rejects_weak_dimension(self):
        pair = score_pair(Rect(10, 10, 20, 80), Rect(70, 10, 20, 80))
        assert select_best([pair], VisionConfig(min_subscore=15)) is pair
        assert select_best([pair], VisionConfig(min_subscore=60)) is None

    def test_min_subscore_falls_back_to_next_pair(self):
        weak = ScoredPair(Rect(0, 0, 1, 1), Rect(2, 0, 1, 1), SubScores(10, 100, 100, 100, 100, 100))
        steady = _pair_with_scores(80.0)
        config = VisionConfig(min_subscore=15)
        assert select_best([weak, steady], config) is steady
