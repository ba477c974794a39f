# src/seo_scoring/constants.py
"""Centralized constants for the SEO scoring core.

This module contains the fixed grading tables and magic numbers shared
across modules. For user-configurable content thresholds, see config.py
and ContentThresholds.
"""

# =============================================================================
# Grading Constants
# =============================================================================

# Letter grade ranges, checked from A downwards
GRADE_RANGES = {
    "A": {"min": 90, "max": 100, "color": "#22c55e", "label": "Excellent"},  # Green
    "B": {"min": 75, "max": 89, "color": "#84cc16", "label": "Good"},  # Light green
    "C": {"min": 60, "max": 74, "color": "#facc15", "label": "Average"},  # Yellow
    "D": {"min": 40, "max": 59, "color": "#f97316", "label": "Poor"},  # Orange
    "F": {"min": 0, "max": 39, "color": "#ef4444", "label": "Critical"},  # Red
}

# Issue severity weights used by weighted score penalties
SEVERITY_WEIGHTS = {
    "critical": 1.0,
    "high": 0.8,
    "medium": 0.5,
    "low": 0.3,
    "info": 0.1,
}

RECOMMENDED_ACTIONS = {
    "A": "Maintain current implementation and monitor periodically",
    "B": "Address minor issues to reach excellent status",
    "C": "Implement recommended improvements to enhance performance",
    "D": "Prioritize addressing critical issues immediately",
    "F": "Requires immediate attention and comprehensive overhaul",
}
DEFAULT_RECOMMENDED_ACTION = "Review and implement suggested improvements"

# Normalization curve anchors
NORMALIZED_WARNING_SCORE = 75  # Score at the warning threshold
NORMALIZED_CRITICAL_SCORE = 40  # Score at the critical threshold

# Weighted score defaults
DEFAULT_MAX_PENALTY = 100
DEFAULT_MAX_ISSUES_BEFORE_FULL_PENALTY = 10
DEFAULT_BASE_WEIGHT = 1.0

# Points of headroom each outstanding issue represents
DEFAULT_MAX_ISSUE_IMPACT = 5

# Industry comparison bands (score points)
INDUSTRY_SIGNIFICANT_DIFFERENCE = 15
INDUSTRY_NOTABLE_DIFFERENCE = 5


# =============================================================================
# Performance Metric Constants
# =============================================================================

# (good, needs_improvement, poor) per metric; all lower-is-better
PERFORMANCE_METRIC_THRESHOLDS = {
    "lcp": (2500, 4000, 6000),  # ms
    "fid": (100, 300, 500),  # ms
    "cls": (0.1, 0.25, 0.5),  # layout shift score
    "fcp": (1800, 3000, 4500),  # ms
    "ttfb": (800, 1800, 2500),  # ms
    "si": (3400, 5800, 8000),  # ms
}

# Core Web Vitals carry most of the weight
PERFORMANCE_METRIC_WEIGHTS = {
    "lcp": 0.25,
    "fid": 0.25,
    "cls": 0.25,
    "fcp": 0.10,
    "ttfb": 0.10,
    "si": 0.05,
}


# =============================================================================
# Content Analysis Constants
# =============================================================================

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")

HEADING_STRUCTURE_OK = "well-structured"
HEADING_STRUCTURE_NEEDS_IMPROVEMENT = "needs-improvement"

DISTRIBUTION_EVEN = "even"
DISTRIBUTION_SOMEWHAT_EVEN = "somewhat even"
DISTRIBUTION_UNEVEN = "uneven"

DENSITY_SPARSE = "sparse"
DENSITY_OPTIMAL = "optimal"
DENSITY_STUFFING = "stuffing"

KEYWORDS_PROVIDED = "provided"
KEYWORDS_GENERATED = "generated"
KEYWORDS_FROM_TITLE = "title"
KEYWORDS_NONE = "none"

# Title words must be longer than this to become fallback keywords
MIN_TITLE_KEYWORD_LENGTH = 3

# Number of keywords requested from the text generator
EXTRACTED_KEYWORD_COUNT = 5

# Common English words to filter out of fallback keywords
STOP_WORDS = {
    'the', 'be', 'to', 'of', 'and', 'a', 'in', 'that', 'have', 'i',
    'it', 'for', 'not', 'on', 'with', 'he', 'as', 'you', 'do', 'at',
    'this', 'but', 'his', 'by', 'from', 'they', 'we', 'say', 'her', 'she',
    'or', 'an', 'will', 'my', 'one', 'all', 'would', 'there', 'their',
    'what', 'so', 'up', 'out', 'if', 'about', 'who', 'get', 'which', 'go',
    'me', 'when', 'make', 'can', 'like', 'time', 'no', 'just', 'him', 'know',
    'take', 'people', 'into', 'year', 'your', 'good', 'some', 'could', 'them',
    'see', 'other', 'than', 'then', 'now', 'look', 'only', 'come', 'its', 'over',
    'think', 'also', 'back', 'after', 'use', 'two', 'how', 'our', 'work',
    'first', 'well', 'way', 'even', 'new', 'want', 'because', 'any', 'these',
    'give', 'day', 'most', 'us', 'is', 'was', 'are', 'been', 'has', 'had',
    'were', 'said', 'did', 'having', 'may', 'should'
}

# Readability fallback used when the text generator fails
FALLBACK_READABILITY = {
    "readability_score": 50,
    "reading_level": "High School",
    "sentence_complexity": "Moderate",
    "vocabulary_level": "Intermediate",
    "passive_voice_percentage": 20,
    "improvement_areas": ["Consider analyzing the content with a different tool"],
    "analysis_summary": "Analysis could not be completed successfully.",
}

KEYWORD_ANALYSIS_UNAVAILABLE = "Keyword analysis could not be completed"
