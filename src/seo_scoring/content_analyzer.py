"""Content analysis - readability, keywords and structure combined into one score."""

import hashlib
import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence

from seo_scoring.config import ContentThresholds, default_thresholds
from seo_scoring.constants import (
    DISTRIBUTION_SOMEWHAT_EVEN,
    DISTRIBUTION_UNEVEN,
    KEYWORDS_FROM_TITLE,
    KEYWORDS_NONE,
)
from seo_scoring.grading import GradingSystem
from seo_scoring.html_structure import parse_document
from seo_scoring.keywords import KeywordAnalyzer
from seo_scoring.models import (
    ContentAnalysisResult,
    KeywordAnalysis,
    ReadabilityAnalysis,
    StructureAnalysis,
    WeightedComponentScore,
)
from seo_scoring.readability import ReadabilityAnalyzer
from seo_scoring.storage import AbstractAnalysisStore
from seo_scoring.structure import StructureAnalyzer
from seo_scoring.text_generation import TextGenerator

logger = logging.getLogger(__name__)


class ContentAnalyzer:
    """Analyzes page content and memoizes results by content hash.

    Collaborators are injected: a TextGenerator for the readability and
    keyword-extraction prompts, and an optional AbstractAnalysisStore for
    memoization. Without a generator the fallbacks are used; without a store
    every call recomputes.
    """

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        store: Optional[AbstractAnalysisStore] = None,
        thresholds: ContentThresholds = default_thresholds,
    ):
        self.generator = generator
        self.store = store
        self.thresholds = thresholds
        self.readability_analyzer = ReadabilityAnalyzer(generator, thresholds)
        self.keyword_analyzer = KeywordAnalyzer(generator, thresholds)
        self.structure_analyzer = StructureAnalyzer(thresholds)

        # content_hash -> [lock, waiter count]
        self._key_locks: Dict[str, list] = {}
        self._key_locks_guard = threading.Lock()

    @staticmethod
    def compute_content_hash(
        content: str,
        title: str = "",
        target_keywords: Optional[Sequence[str]] = None,
    ) -> str:
        """MD5 hex digest identifying one (content, title, keywords) input."""
        payload = json.dumps(
            [content, title, list(target_keywords) if target_keywords is not None else None],
            ensure_ascii=False,
        )
        return hashlib.md5(payload.encode("utf-8")).hexdigest()

    def analyze_content(
        self,
        content: str,
        title: str,
        target_keywords: Optional[Sequence[str]] = None,
        content_id: Optional[str] = None,
    ) -> Optional[ContentAnalysisResult]:
        """Analyze content and return the combined result.

        A previously stored analysis for the same input is returned verbatim.
        Concurrent calls for the same input are serialized so only one of them
        computes and stores.

        Args:
            content: Page HTML or text
            title: Page title
            target_keywords: Ordered keywords, primary first; extracted when None
            content_id: Caller's identifier for the analysed page

        Returns:
            ContentAnalysisResult, or None if the analysis is unavailable
        """
        try:
            content_hash = self.compute_content_hash(content, title, target_keywords)

            with self._exclusive(content_hash):
                if self.store is not None:
                    existing = self.store.find_by_content_hash(content_hash)
                    if existing:
                        logger.debug(f"Cache hit for content hash {content_hash}")
                        return self.result_from_record(existing, content_id)

                result = self._run_analysis(content, title, target_keywords, content_hash, content_id)

                if self.store is not None:
                    stored = self.store.save_analysis(self.result_to_record(result))
                    if not stored.get("inserted", True):
                        logger.debug(f"Analysis for content hash {content_hash} was stored elsewhere first")
                        return self.result_from_record(stored, content_id)
                    result.analysis_id = stored["id"]
                    logger.debug(f"Stored analysis {result.analysis_id} for content hash {content_hash}")

                return result

        except Exception:
            logger.exception("Error analyzing content")
            return None

    def get_analysis(self, analysis_id: int) -> Optional[ContentAnalysisResult]:
        """Load a stored analysis by id."""
        if self.store is None:
            return None
        record = self.store.get_analysis(analysis_id)
        return self.result_from_record(record) if record else None

    def get_latest_analysis(self, content_id: str) -> Optional[ContentAnalysisResult]:
        """Load the most recent stored analysis for a content page."""
        if self.store is None:
            return None
        record = self.store.get_latest_for_content(content_id)
        return self.result_from_record(record) if record else None

    def _run_analysis(
        self,
        content: str,
        title: str,
        target_keywords: Optional[Sequence[str]],
        content_hash: str,
        content_id: Optional[str],
    ) -> ContentAnalysisResult:
        document = parse_document(content)

        readability = self.readability_analyzer.analyze(content)
        keywords = self.keyword_analyzer.analyze(content, title, target_keywords, document=document)
        structure = self.structure_analyzer.analyze(content, document=document)

        fallback_reasons = self._fallback_reasons(readability, keywords)
        for reason in fallback_reasons:
            logger.warning(f"Degraded content analysis ({content_hash}): {reason}")

        return ContentAnalysisResult(
            content_hash=content_hash,
            content_score=self.calculate_content_score(readability, keywords, structure),
            readability_analysis=readability,
            keyword_analysis=keywords,
            structure_analysis=structure,
            recommendations=self.generate_recommendations(readability, keywords, structure),
            content_id=content_id,
            degraded=bool(fallback_reasons),
            fallback_reasons=fallback_reasons,
        )

    def calculate_keyword_score(self, keyword_analysis: KeywordAnalysis) -> int:
        """Score keyword placement starting from 100 and deducting per problem."""
        t = self.thresholds
        score = 100

        if not keyword_analysis.keyword_in_title:
            score -= t.keyword_missing_title_penalty
        if keyword_analysis.keyword_in_headings == 0:
            score -= t.keyword_missing_headings_penalty
        if not keyword_analysis.keyword_in_first_paragraph:
            score -= t.keyword_missing_first_paragraph_penalty

        if keyword_analysis.keyword_distribution == DISTRIBUTION_UNEVEN:
            score -= t.keyword_uneven_penalty
        elif keyword_analysis.keyword_distribution == DISTRIBUTION_SOMEWHAT_EVEN:
            score -= t.keyword_somewhat_even_penalty

        score -= len(keyword_analysis.improvement_areas) * t.keyword_improvement_penalty

        return max(0, min(100, score))

    def calculate_content_score(
        self,
        readability: ReadabilityAnalysis,
        keywords: KeywordAnalysis,
        structure: StructureAnalysis,
    ) -> int:
        """Weighted blend of the readability, keyword and structure scores."""
        return GradingSystem.calculate_overall_score([
            WeightedComponentScore("readability", readability.readability_score, self.thresholds.readability_weight),
            WeightedComponentScore("keywords", self.calculate_keyword_score(keywords), self.thresholds.keyword_weight),
            WeightedComponentScore("structure", structure.structure_score, self.thresholds.structure_weight),
        ])

    @staticmethod
    def generate_recommendations(
        readability: ReadabilityAnalysis,
        keywords: KeywordAnalysis,
        structure: StructureAnalysis,
    ) -> List[str]:
        """All improvement areas, deduplicated in first-seen order."""
        combined = (
            readability.improvement_areas
            + keywords.improvement_areas
            + structure.improvement_areas
        )
        return list(dict.fromkeys(combined))

    @staticmethod
    def _fallback_reasons(readability: ReadabilityAnalysis, keywords: KeywordAnalysis) -> List[str]:
        reasons = []
        if readability.is_fallback:
            reasons.append("readability: text generator unavailable or reply unusable")
        if keywords.keywords_source == KEYWORDS_FROM_TITLE:
            reasons.append("keywords: extracted from the title instead of the text generator")
        elif keywords.keywords_source == KEYWORDS_NONE:
            reasons.append("keywords: no keywords available")
        return reasons

    @staticmethod
    def result_to_record(result: ContentAnalysisResult) -> Dict[str, Any]:
        """Row shape expected by AbstractAnalysisStore.save_analysis."""
        return {
            "content_page_id": result.content_id,
            "content_hash": result.content_hash,
            "analysis_type": "comprehensive",
            "content_score": result.content_score,
            "readability_analysis": result.readability_analysis.to_dict(),
            "keyword_analysis": result.keyword_analysis.to_dict(),
            "structure_analysis": result.structure_analysis.to_dict(),
            "recommendations": list(result.recommendations),
            "fallback_reasons": list(result.fallback_reasons),
            "degraded": result.degraded,
            "created_at": result.analyzed_at.isoformat(),
        }

    @staticmethod
    def result_from_record(
        record: Dict[str, Any], content_id: Optional[str] = None
    ) -> ContentAnalysisResult:
        """Rebuild a result from a stored row."""
        created_at = record.get("created_at")
        return ContentAnalysisResult(
            content_hash=record["content_hash"],
            content_score=record["content_score"],
            readability_analysis=ReadabilityAnalysis.from_dict(record["readability_analysis"]),
            keyword_analysis=KeywordAnalysis.from_dict(record["keyword_analysis"]),
            structure_analysis=StructureAnalysis.from_dict(record["structure_analysis"]),
            recommendations=list(record.get("recommendations") or []),
            content_id=content_id or record.get("content_page_id"),
            analysis_id=record.get("id"),
            degraded=bool(record.get("degraded", False)),
            fallback_reasons=list(record.get("fallback_reasons") or []),
            from_cache=True,
            analyzed_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )

    @contextmanager
    def _exclusive(self, key: str) -> Iterator[None]:
        """Hold a per-key lock; the entry is dropped once nobody waits on it."""
        with self._key_locks_guard:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._key_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]
