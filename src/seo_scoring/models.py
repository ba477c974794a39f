"""Data models for SEO scoring and content analysis."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Optional

from seo_scoring.constants import (
    FALLBACK_READABILITY,
    HEADING_LEVELS,
    KEYWORDS_NONE,
    DISTRIBUTION_EVEN,
)


# ============================================================================
# Grading Models
# ============================================================================

@dataclass(frozen=True)
class MetricThresholds:
    """Boundaries for one metric.

    For lower-is-better metrics good < needs_improvement < poor; for
    higher-is-better metrics the order is reversed.
    """

    good: float
    needs_improvement: float
    poor: float


@dataclass(frozen=True)
class Grade:
    """Letter grade derived from a numeric score."""

    letter: str  # A/B/C/D/F
    color: str  # Hex colour token for dashboards
    label: str  # Excellent/Good/Average/Poor/Critical


@dataclass(frozen=True)
class WeightedComponentScore:
    """One named component of an overall score."""

    name: str
    raw_score: float  # 0-100
    weight: float  # 0-1


@dataclass(frozen=True)
class IndustryComparison:
    """How a score compares to an industry average."""

    difference: float
    percentage_difference: float
    comparison_text: str


# ============================================================================
# Content Analysis Models
# ============================================================================

@dataclass(frozen=True)
class KeywordDensityEntry:
    """Occurrence statistics for one keyword."""

    keyword: str
    occurrences: int
    density_percent: float  # occurrences / total words * 100, 2 decimals
    status: str = ""  # sparse/optimal/stuffing


@dataclass
class ReadabilityAnalysis:
    """Readability assessment returned by the text generator."""

    readability_score: float
    reading_level: str
    sentence_complexity: str
    vocabulary_level: str
    passive_voice_percentage: float
    improvement_areas: list[str] = field(default_factory=list)
    analysis_summary: str = ""
    is_fallback: bool = False

    @classmethod
    def fallback(cls) -> "ReadabilityAnalysis":
        """Fixed assessment used when the text generator cannot be used."""
        values = dict(FALLBACK_READABILITY)
        values["improvement_areas"] = list(values["improvement_areas"])
        return cls(**values, is_fallback=True)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReadabilityAnalysis":
        defaults = FALLBACK_READABILITY
        return cls(
            readability_score=data.get("readability_score", defaults["readability_score"]),
            reading_level=data.get("reading_level", defaults["reading_level"]),
            sentence_complexity=data.get("sentence_complexity", defaults["sentence_complexity"]),
            vocabulary_level=data.get("vocabulary_level", defaults["vocabulary_level"]),
            passive_voice_percentage=data.get(
                "passive_voice_percentage", defaults["passive_voice_percentage"]
            ),
            improvement_areas=list(data.get("improvement_areas") or []),
            analysis_summary=data.get("analysis_summary", ""),
            is_fallback=bool(data.get("is_fallback", False)),
        )


@dataclass
class KeywordAnalysis:
    """Keyword usage statistics for the primary and secondary keywords."""

    keyword_density: dict[str, float] = field(default_factory=dict)  # keyword -> density %
    density_entries: list[KeywordDensityEntry] = field(default_factory=list)
    keyword_distribution: str = DISTRIBUTION_EVEN  # even/somewhat even/uneven
    primary_keyword: Optional[str] = None
    primary_keyword_usage: int = 0
    secondary_keyword_usage: list[int] = field(default_factory=list)
    keyword_in_title: bool = False
    keyword_in_headings: int = 0  # Number of headings containing the primary keyword
    keyword_in_first_paragraph: bool = False
    improvement_areas: list[str] = field(default_factory=list)
    keywords_source: str = KEYWORDS_NONE  # provided/generated/title/none

    @classmethod
    def empty(cls, message: str) -> "KeywordAnalysis":
        """Analysis for content with no keywords to analyze."""
        return cls(improvement_areas=[message], keywords_source=KEYWORDS_NONE)

    @property
    def has_keywords(self) -> bool:
        return self.primary_keyword is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordAnalysis":
        return cls(
            keyword_density=dict(data.get("keyword_density") or {}),
            density_entries=[
                KeywordDensityEntry(**entry) for entry in data.get("density_entries") or []
            ],
            keyword_distribution=data.get("keyword_distribution", DISTRIBUTION_EVEN),
            primary_keyword=data.get("primary_keyword"),
            primary_keyword_usage=data.get("primary_keyword_usage", 0),
            secondary_keyword_usage=list(data.get("secondary_keyword_usage") or []),
            keyword_in_title=bool(data.get("keyword_in_title", False)),
            keyword_in_headings=data.get("keyword_in_headings", 0),
            keyword_in_first_paragraph=bool(data.get("keyword_in_first_paragraph", False)),
            improvement_areas=list(data.get("improvement_areas") or []),
            keywords_source=data.get("keywords_source", KEYWORDS_NONE),
        )


def _empty_heading_count() -> dict[str, int]:
    return {level: 0 for level in HEADING_LEVELS}


@dataclass
class StructureCounts:
    """Structural features extracted once per content analysis."""

    heading_count: dict[str, int] = field(default_factory=_empty_heading_count)
    paragraph_count: int = 0
    average_paragraph_length: int = 0  # words
    list_count: int = 0
    image_count: int = 0


@dataclass
class StructureAnalysis:
    """Heading hierarchy and layout assessment."""

    heading_structure: str  # well-structured/needs-improvement
    heading_count: dict[str, int] = field(default_factory=_empty_heading_count)
    paragraph_count: int = 0
    average_paragraph_length: int = 0
    list_count: int = 0
    image_count: int = 0
    structure_score: int = 100  # 0-100
    improvement_areas: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StructureAnalysis":
        heading_count = _empty_heading_count()
        heading_count.update(data.get("heading_count") or {})
        return cls(
            heading_structure=data.get("heading_structure", "unknown"),
            heading_count=heading_count,
            paragraph_count=data.get("paragraph_count", 0),
            average_paragraph_length=data.get("average_paragraph_length", 0),
            list_count=data.get("list_count", 0),
            image_count=data.get("image_count", 0),
            structure_score=data.get("structure_score", 0),
            improvement_areas=list(data.get("improvement_areas") or []),
        )


@dataclass
class ContentAnalysisResult:
    """Combined content analysis for one (content, title, keywords) input."""

    content_hash: str
    content_score: int  # 0-100
    readability_analysis: ReadabilityAnalysis
    keyword_analysis: KeywordAnalysis
    structure_analysis: StructureAnalysis
    recommendations: list[str] = field(default_factory=list)
    content_id: Optional[str] = None
    analysis_id: Optional[int] = None
    degraded: bool = False  # True when any stage used a fallback
    fallback_reasons: list[str] = field(default_factory=list)
    from_cache: bool = False
    analyzed_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "content_hash": self.content_hash,
            "content_score": self.content_score,
            "readability_analysis": self.readability_analysis.to_dict(),
            "keyword_analysis": self.keyword_analysis.to_dict(),
            "structure_analysis": self.structure_analysis.to_dict(),
            "recommendations": list(self.recommendations),
            "content_id": self.content_id,
            "analysis_id": self.analysis_id,
            "degraded": self.degraded,
            "fallback_reasons": list(self.fallback_reasons),
            "from_cache": self.from_cache,
            "analyzed_at": self.analyzed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentAnalysisResult":
        """Deserialize from a dictionary produced by to_dict()."""
        analyzed_at = data.get("analyzed_at")
        return cls(
            content_hash=data["content_hash"],
            content_score=data["content_score"],
            readability_analysis=ReadabilityAnalysis.from_dict(data["readability_analysis"]),
            keyword_analysis=KeywordAnalysis.from_dict(data["keyword_analysis"]),
            structure_analysis=StructureAnalysis.from_dict(data["structure_analysis"]),
            recommendations=list(data.get("recommendations") or []),
            content_id=data.get("content_id"),
            analysis_id=data.get("analysis_id"),
            degraded=bool(data.get("degraded", False)),
            fallback_reasons=list(data.get("fallback_reasons") or []),
            from_cache=bool(data.get("from_cache", False)),
            analyzed_at=datetime.fromisoformat(analyzed_at) if analyzed_at else datetime.now(),
        )
