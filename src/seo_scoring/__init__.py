"""SEO scoring: grading engine and on-page content analysis."""

__version__ = "0.1.0"

from seo_scoring.grading import GradingSystem
from seo_scoring.content_analyzer import ContentAnalyzer
from seo_scoring.readability import ReadabilityAnalyzer
from seo_scoring.keywords import KeywordAnalyzer
from seo_scoring.structure import StructureAnalyzer
from seo_scoring.text_generation import (
    LLMClient,
    TextGenerator,
    extract_json_array,
    extract_json_object,
)
from seo_scoring.storage import (
    AbstractAnalysisStore,
    LocalSqliteAnalysisStore,
    get_store_client,
)
from seo_scoring.models import (
    MetricThresholds,
    Grade,
    WeightedComponentScore,
    IndustryComparison,
    KeywordDensityEntry,
    ReadabilityAnalysis,
    KeywordAnalysis,
    StructureCounts,
    StructureAnalysis,
    ContentAnalysisResult,
)
from seo_scoring.config import settings, Config, ContentThresholds, default_thresholds

__all__ = [
    # Core
    "GradingSystem",
    "ContentAnalyzer",
    "ReadabilityAnalyzer",
    "KeywordAnalyzer",
    "StructureAnalyzer",
    # Collaborators
    "LLMClient",
    "TextGenerator",
    "extract_json_array",
    "extract_json_object",
    "AbstractAnalysisStore",
    "LocalSqliteAnalysisStore",
    "get_store_client",
    # Models
    "MetricThresholds",
    "Grade",
    "WeightedComponentScore",
    "IndustryComparison",
    "KeywordDensityEntry",
    "ReadabilityAnalysis",
    "KeywordAnalysis",
    "StructureCounts",
    "StructureAnalysis",
    "ContentAnalysisResult",
    # Configuration
    "settings",
    "Config",
    "ContentThresholds",
    "default_thresholds",
]
