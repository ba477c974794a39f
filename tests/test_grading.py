"""Tests for the grading system."""

import math

import pytest

from seo_scoring.grading import GradingSystem, clamp_score, round_half_up
from seo_scoring.models import MetricThresholds, WeightedComponentScore


class TestRounding:
    """Half-up rounding used throughout the scores."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(87.5) == 88
        assert round_half_up(-2.5) == -2

    def test_nan_is_zero(self):
        assert round_half_up(float("nan")) == 0
        assert clamp_score(float("nan")) == 0

    def test_infinity_rounds_to_zero(self):
        assert round_half_up(float("inf")) == 0
        assert round_half_up(float("-inf")) == 0

    def test_clamp_score_bounds(self):
        assert clamp_score(-12.3) == 0
        assert clamp_score(150) == 100
        assert clamp_score(float("inf")) == 100
        assert clamp_score(64.5) == 65


class TestGetGrade:
    """Letter grade boundaries."""

    @pytest.mark.parametrize("score,letter", [
        (100, "A"),
        (90, "A"),
        (89.9, "B"),
        (75, "B"),
        (74, "C"),
        (60, "C"),
        (59, "D"),
        (40, "D"),
        (39.99, "F"),
        (0, "F"),
    ])
    def test_boundaries(self, score, letter):
        assert GradingSystem.get_grade(score).letter == letter

    def test_out_of_range_scores(self):
        assert GradingSystem.get_grade(150).letter == "A"
        assert GradingSystem.get_grade(-5).letter == "F"
        assert GradingSystem.get_grade(float("nan")).letter == "F"

    def test_grade_carries_label_and_color(self):
        grade = GradingSystem.get_grade(95)
        assert grade.label == "Excellent"
        assert grade.color == "#22c55e"
        assert GradingSystem.get_grade(10).label == "Critical"

    def test_recommended_action(self):
        assert GradingSystem.get_recommended_action("A") == (
            "Maintain current implementation and monitor periodically"
        )
        assert GradingSystem.get_recommended_action("Z") == (
            "Review and implement suggested improvements"
        )


class TestNormalizeLowerBetter:
    """Lower-is-better normalization (ideal=2500, warning=4000, critical=6000)."""

    THRESHOLDS = (2500, 4000, 6000)

    def normalize(self, value):
        return GradingSystem.normalize_score_lower_better(value, *self.THRESHOLDS)

    @pytest.mark.parametrize("value,expected", [
        (0, 100),
        (2500, 100),
        (3250, 88),
        (4000, 75),
        (5000, 58),
        (6000, 40),
        (9000, 20),
        (12000, 0),
        (50000, 0),
    ])
    def test_zones(self, value, expected):
        assert self.normalize(value) == expected

    def test_monotonic_non_increasing(self):
        scores = [self.normalize(value) for value in range(0, 15000, 125)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))
        assert all(0 <= s <= 100 for s in scores)

    def test_zero_critical_threshold(self):
        assert GradingSystem.normalize_score_lower_better(1, -2, -1, 0) == 0

    def test_zero_width_band_does_not_raise(self):
        assert GradingSystem.normalize_score_lower_better(100, 100, 100, 100) == 100
        assert GradingSystem.normalize_score_lower_better(150, 100, 100, 100) == 20


class TestNormalizeHigherBetter:
    """Higher-is-better normalization (critical=40, warning=60, ideal=80)."""

    THRESHOLDS = (40, 60, 80)

    def normalize(self, value):
        return GradingSystem.normalize_score_higher_better(value, *self.THRESHOLDS)

    @pytest.mark.parametrize("value,expected", [
        (100, 100),
        (80, 100),
        (70, 88),
        (60, 75),
        (50, 58),
        (40, 40),
        (20, 20),
        (0, 0),
    ])
    def test_zones(self, value, expected):
        assert self.normalize(value) == expected

    def test_monotonic_non_decreasing(self):
        scores = [self.normalize(value) for value in range(0, 101)]
        assert all(a <= b for a, b in zip(scores, scores[1:]))

    def test_normalize_metric_dispatch(self):
        lcp = MetricThresholds(good=2500, needs_improvement=4000, poor=6000)
        assert GradingSystem.normalize_metric(4000, lcp) == 75

        coverage = MetricThresholds(good=80, needs_improvement=60, poor=40)
        assert GradingSystem.normalize_metric(70, coverage, lower_is_better=False) == 88


class TestWeightedScore:
    """Severity-weighted issue penalties."""

    def test_no_issues_keeps_base(self):
        assert GradingSystem.calculate_weighted_score(100, {}) == 100

    def test_full_penalty(self):
        assert GradingSystem.calculate_weighted_score(100, {"critical": 10}) == 0

    def test_mixed_severities(self):
        # 2 * 0.8 + 2 * 0.5 = 2.6 weighted issues -> 26 points
        assert GradingSystem.calculate_weighted_score(100, {"high": 2, "medium": 2}) == 74
        assert GradingSystem.calculate_weighted_score(100, {"low": 3}) == 91

    def test_unknown_severities_ignored(self):
        assert GradingSystem.calculate_weighted_score(100, {"cosmetic": 50}) == 100

    def test_custom_penalty_settings(self):
        assert GradingSystem.calculate_weighted_score(80, {"critical": 5}, max_penalty=50) == 55
        assert GradingSystem.calculate_weighted_score(100, {"critical": 10}, base_weight=0.5) == 50

    def test_zero_issue_budget(self):
        assert GradingSystem.calculate_weighted_score(
            100, {"info": 1}, max_issues_before_full_penalty=0
        ) == 0
        assert GradingSystem.calculate_weighted_score(
            100, {}, max_issues_before_full_penalty=0
        ) == 100

    def test_more_issues_never_score_higher(self):
        scores = [
            GradingSystem.calculate_weighted_score(90, {"medium": n})
            for n in range(0, 30)
        ]
        assert all(a >= b for a, b in zip(scores, scores[1:]))
        assert scores[-1] == 0


class TestOverallScore:
    """Blending component scores."""

    def test_weights_summing_to_one(self):
        components = [
            WeightedComponentScore("a", 80, 0.5),
            WeightedComponentScore("b", 60, 0.5),
        ]
        assert GradingSystem.calculate_overall_score(components) == 70

    def test_weights_renormalized(self):
        components = [
            WeightedComponentScore("a", 80, 1),
            WeightedComponentScore("b", 60, 1),
        ]
        assert GradingSystem.calculate_overall_score(components) == 70

    def test_no_components(self):
        assert GradingSystem.calculate_overall_score([]) == 0
        assert GradingSystem.calculate_overall_score([WeightedComponentScore("a", 90, 0)]) == 0


class TestPerformanceScore:
    """Page speed metric blending."""

    def test_all_metrics_good(self):
        metrics = {"lcp": 2500, "fid": 100, "cls": 0.1, "fcp": 1800, "ttfb": 800, "si": 3400}
        assert GradingSystem.calculate_performance_score(metrics) == 100

    def test_all_metrics_far_past_critical(self):
        metrics = {"lcp": 20000, "fid": 2000, "cls": 2.0, "fcp": 20000, "ttfb": 10000, "si": 30000}
        assert GradingSystem.calculate_performance_score(metrics) == 0

    def test_missing_metrics_skipped(self):
        assert GradingSystem.calculate_performance_score({"lcp": 4000}) == 75
        assert GradingSystem.calculate_performance_score({"lcp": 4000, "fid": None}) == 75

    def test_no_metrics(self):
        assert GradingSystem.calculate_performance_score({}) == 0


class TestImprovementAndSummaries:
    """Improvement potential, summaries and industry comparison."""

    def test_improvement_potential_capped_by_gap(self):
        assert GradingSystem.calculate_improvement_potential(80, 10, 5) == 20
        assert GradingSystem.calculate_improvement_potential(50, 4, 5) == 20
        assert GradingSystem.calculate_improvement_potential(30, 30) == 70

    def test_improvement_potential_never_negative(self):
        assert GradingSystem.calculate_improvement_potential(100, 3) == 0
        assert GradingSystem.calculate_improvement_potential(120, 3) == 0

    @pytest.mark.parametrize("score,issues,prefix", [
        (95, 0, "Excellent (95/100). No significant issues found."),
        (92, 2, "Excellent (92/100). 2 minor issues found."),
        (80, 3, "Good (80/100)."),
        (65, 4, "Average (65/100)."),
        (45, 5, "Poor (45/100)."),
        (20, 9, "Critical (20/100)."),
    ])
    def test_score_summary(self, score, issues, prefix):
        assert GradingSystem.generate_score_summary(score, issues).startswith(prefix)

    @pytest.mark.parametrize("score,average,text", [
        (90, 70, "Significantly above industry average (29% better)"),
        (80, 70, "Above industry average (14% better)"),
        (72, 70, "At industry average level"),
        (66, 70, "At industry average level"),
        (60, 70, "Below industry average (14% worse)"),
        (40, 70, "Significantly below industry average (43% worse)"),
    ])
    def test_industry_comparison(self, score, average, text):
        comparison = GradingSystem.compare_to_industry_average(score, average)
        assert comparison.comparison_text == text
        assert comparison.difference == score - average

    def test_industry_comparison_zero_average(self):
        comparison = GradingSystem.compare_to_industry_average(50, 0)
        assert comparison.percentage_difference == 0.0
        assert comparison.comparison_text.startswith("Significantly above")
        assert not math.isnan(comparison.percentage_difference)

    @pytest.mark.parametrize("score,average", [
        (float("inf"), 50),
        (float("-inf"), 50),
        (100, 1e-310),
        (float("nan"), 50),
    ])
    def test_industry_comparison_extreme_inputs(self, score, average):
        comparison = GradingSystem.compare_to_industry_average(score, average)
        assert "industry average" in comparison.comparison_text

    def test_industry_comparison_infinite_percentage(self):
        comparison = GradingSystem.compare_to_industry_average(100, 1e-310)
        assert comparison.comparison_text == "Significantly above industry average (0% better)"
