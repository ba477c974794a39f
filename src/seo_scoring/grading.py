"""Standardized scoring and grading shared by every SEO analysis component.

Converts raw metric values (response times, counts, percentages) into 0-100
scores and letter grades, and blends per-category scores into overall scores.
Every function is pure and total: inputs are numbers, outputs are clamped,
nothing raises.
"""

import logging
import math
from typing import Mapping, Optional, Sequence

from seo_scoring.constants import (
    DEFAULT_BASE_WEIGHT,
    DEFAULT_MAX_ISSUE_IMPACT,
    DEFAULT_MAX_ISSUES_BEFORE_FULL_PENALTY,
    DEFAULT_MAX_PENALTY,
    DEFAULT_RECOMMENDED_ACTION,
    GRADE_RANGES,
    INDUSTRY_NOTABLE_DIFFERENCE,
    INDUSTRY_SIGNIFICANT_DIFFERENCE,
    NORMALIZED_CRITICAL_SCORE,
    NORMALIZED_WARNING_SCORE,
    PERFORMANCE_METRIC_THRESHOLDS,
    PERFORMANCE_METRIC_WEIGHTS,
    RECOMMENDED_ACTIONS,
    SEVERITY_WEIGHTS,
)
from seo_scoring.models import (
    Grade,
    IndustryComparison,
    MetricThresholds,
    WeightedComponentScore,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    NaN and infinities round to 0.
    """
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a score to the 0-100 range."""
    if math.isnan(value):
        return 0
    return round_half_up(max(0.0, min(100.0, value)))


class GradingSystem:
    """Threshold-based score normalization and letter grading."""

    GRADE_RANGES = GRADE_RANGES
    SEVERITY_WEIGHTS = SEVERITY_WEIGHTS

    # Scanned from the best grade down; F catches everything else
    _GRADE_ORDER = ("A", "B", "C", "D")

    @classmethod
    def get_grade(cls, score: float) -> Grade:
        """Get a letter grade for a numeric score.

        Scores above 100 grade as A and scores below 0 (or NaN) as F.

        Args:
            score: Numeric score, normally 0-100

        Returns:
            Grade with letter, colour token and label
        """
        for letter in cls._GRADE_ORDER:
            grade_range = cls.GRADE_RANGES[letter]
            if score >= grade_range["min"]:
                return Grade(letter=letter, color=grade_range["color"], label=grade_range["label"])

        failing = cls.GRADE_RANGES["F"]
        return Grade(letter="F", color=failing["color"], label=failing["label"])

    @staticmethod
    def get_recommended_action(letter: str) -> str:
        """Get the recommended next step for a letter grade."""
        return RECOMMENDED_ACTIONS.get(letter, DEFAULT_RECOMMENDED_ACTION)

    @staticmethod
    def normalize_score_lower_better(
        value: float,
        ideal_threshold: float,
        warning_threshold: float,
        critical_threshold: float,
    ) -> int:
        """Normalize a metric where smaller raw values are better (latency, layout shift).

        Three zones: ideal..warning maps 100 -> 75, warning..critical maps
        75 -> 40, and past critical the score decays from 40 to 0 as the
        excess over critical grows to 100% of critical.

        Args:
            value: Raw metric value
            ideal_threshold: At or below this the score is 100
            warning_threshold: Value scoring 75
            critical_threshold: Value scoring 40

        Returns:
            Score between 0 and 100
        """
        if value <= ideal_threshold:
            return 100
        if value <= warning_threshold:
            progress = (value - ideal_threshold) / (warning_threshold - ideal_threshold)
            return round_half_up(100 - progress * (100 - NORMALIZED_WARNING_SCORE))
        if value <= critical_threshold:
            progress = (value - warning_threshold) / (critical_threshold - warning_threshold)
            return round_half_up(
                NORMALIZED_WARNING_SCORE
                - progress * (NORMALIZED_WARNING_SCORE - NORMALIZED_CRITICAL_SCORE)
            )

        excess = (value - critical_threshold) / abs(critical_threshold) if critical_threshold else 1.0
        return max(0, round_half_up(
            NORMALIZED_CRITICAL_SCORE - NORMALIZED_CRITICAL_SCORE * min(1.0, excess)
        ))

    @staticmethod
    def normalize_score_higher_better(
        value: float,
        critical_threshold: float,
        warning_threshold: float,
        ideal_threshold: float,
    ) -> int:
        """Normalize a metric where bigger raw values are better (coverage, quality).

        Mirror of normalize_score_lower_better with the comparisons inverted.

        Args:
            value: Raw metric value
            critical_threshold: Value scoring 40
            warning_threshold: Value scoring 75
            ideal_threshold: At or above this the score is 100

        Returns:
            Score between 0 and 100
        """
        if value >= ideal_threshold:
            return 100
        if value >= warning_threshold:
            progress = (ideal_threshold - value) / (ideal_threshold - warning_threshold)
            return round_half_up(100 - progress * (100 - NORMALIZED_WARNING_SCORE))
        if value >= critical_threshold:
            progress = (warning_threshold - value) / (warning_threshold - critical_threshold)
            return round_half_up(
                NORMALIZED_WARNING_SCORE
                - progress * (NORMALIZED_WARNING_SCORE - NORMALIZED_CRITICAL_SCORE)
            )

        shortfall = (critical_threshold - value) / abs(critical_threshold) if critical_threshold else 1.0
        return max(0, round_half_up(
            NORMALIZED_CRITICAL_SCORE - NORMALIZED_CRITICAL_SCORE * min(1.0, shortfall)
        ))

    @classmethod
    def normalize_metric(
        cls,
        value: float,
        thresholds: MetricThresholds,
        lower_is_better: bool = True,
    ) -> int:
        """Normalize a value against a MetricThresholds record."""
        if lower_is_better:
            return cls.normalize_score_lower_better(
                value, thresholds.good, thresholds.needs_improvement, thresholds.poor
            )
        return cls.normalize_score_higher_better(
            value, thresholds.poor, thresholds.needs_improvement, thresholds.good
        )

    @classmethod
    def calculate_weighted_score(
        cls,
        base_score: float,
        issue_counts: Mapping[str, int],
        max_penalty: float = DEFAULT_MAX_PENALTY,
        max_issues_before_full_penalty: float = DEFAULT_MAX_ISSUES_BEFORE_FULL_PENALTY,
        base_weight: float = DEFAULT_BASE_WEIGHT,
    ) -> int:
        """Apply a severity-weighted issue penalty to a base score.

        One critical issue weighs as much as ~3 low-severity issues. The
        penalty saturates once the weighted issue total reaches
        max_issues_before_full_penalty.

        Args:
            base_score: Score before penalties
            issue_counts: Counts keyed by severity (critical/high/medium/low/info)
            max_penalty: Points removed at full penalty
            max_issues_before_full_penalty: Weighted issues that trigger full penalty
            base_weight: Multiplier applied to the penalty

        Returns:
            Penalized score between 0 and 100
        """
        total_weighted_issues = sum(
            (issue_counts.get(severity) or 0) * weight
            for severity, weight in cls.SEVERITY_WEIGHTS.items()
        )

        if max_issues_before_full_penalty > 0:
            penalty_percentage = min(1.0, total_weighted_issues / max_issues_before_full_penalty)
        else:
            penalty_percentage = 1.0 if total_weighted_issues > 0 else 0.0

        penalty = max_penalty * penalty_percentage * base_weight
        return clamp_score(base_score - penalty)

    @staticmethod
    def calculate_overall_score(components: Sequence[WeightedComponentScore]) -> int:
        """Combine weighted component scores into one 0-100 score.

        Weights are expected to sum to 1.0; otherwise the weighted sum is
        divided by the total weight.
        """
        total_weight = sum(component.weight for component in components)
        if total_weight <= 0:
            return 0

        weighted_sum = sum(component.raw_score * component.weight for component in components)
        if not math.isclose(total_weight, 1.0):
            weighted_sum /= total_weight

        return clamp_score(weighted_sum)

    @classmethod
    def calculate_performance_score(cls, metrics: Mapping[str, Optional[float]]) -> int:
        """Blend page speed metrics (lcp, fid, cls, fcp, ttfb, si) into one score.

        Each metric is normalized against its fixed thresholds; metrics that
        are missing are skipped and the remaining weights renormalized.

        Args:
            metrics: Raw metric values keyed by metric name

        Returns:
            Performance score between 0 and 100
        """
        components = []
        for name, weight in PERFORMANCE_METRIC_WEIGHTS.items():
            value = metrics.get(name)
            if value is None:
                continue
            thresholds = MetricThresholds(*PERFORMANCE_METRIC_THRESHOLDS[name])
            components.append(WeightedComponentScore(
                name=name,
                raw_score=cls.normalize_metric(value, thresholds),
                weight=weight,
            ))

        if not components:
            logger.debug("No performance metrics supplied; performance score is 0")

        return cls.calculate_overall_score(components)

    @staticmethod
    def calculate_improvement_potential(
        current_score: float,
        issue_count: int,
        max_issue_impact: float = DEFAULT_MAX_ISSUE_IMPACT,
    ) -> float:
        """Estimate how many points fixing the outstanding issues could gain.

        Never exceeds the actual gap to 100.
        """
        theoretical_improvement = 100 - current_score
        potential_impact = min(100, issue_count * max_issue_impact)
        return max(0, min(theoretical_improvement, potential_impact))

    @classmethod
    def generate_score_summary(cls, score: float, issue_count: int) -> str:
        """Generate a one-line human-readable summary of a score."""
        if score >= 90:
            issues = (
                f"{issue_count} minor issues found." if issue_count > 0
                else "No significant issues found."
            )
            return f"Excellent ({score}/100). {issues}"
        elif score >= 75:
            return f"Good ({score}/100). {issue_count} issues found that could be improved."
        elif score >= 60:
            return f"Average ({score}/100). {issue_count} issues found requiring attention."
        elif score >= 40:
            return (
                f"Poor ({score}/100). {issue_count} significant issues found "
                "requiring immediate attention."
            )
        else:
            return (
                f"Critical ({score}/100). {issue_count} critical issues found "
                "requiring comprehensive overhaul."
            )

    @staticmethod
    def compare_to_industry_average(score: float, industry_average: float) -> IndustryComparison:
        """Compare a score to an industry average.

        Differences of 5 and 15 points separate the qualitative bands.
        """
        difference = score - industry_average
        percentage_difference = (
            difference / industry_average * 100 if industry_average else 0.0
        )
        percent = abs(round_half_up(percentage_difference))

        if difference >= INDUSTRY_SIGNIFICANT_DIFFERENCE:
            text = f"Significantly above industry average ({percent}% better)"
        elif difference >= INDUSTRY_NOTABLE_DIFFERENCE:
            text = f"Above industry average ({percent}% better)"
        elif difference >= -INDUSTRY_NOTABLE_DIFFERENCE:
            text = "At industry average level"
        elif difference >= -INDUSTRY_SIGNIFICANT_DIFFERENCE:
            text = f"Below industry average ({percent}% worse)"
        else:
            text = f"Significantly below industry average ({percent}% worse)"

        return IndustryComparison(
            difference=difference,
            percentage_difference=percentage_difference,
            comparison_text=text,
        )
