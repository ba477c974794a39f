"""Readability assessment delegated to a text generator."""

import logging
from numbers import Number
from typing import Optional

from seo_scoring.config import ContentThresholds, default_thresholds
from seo_scoring.constants import FALLBACK_READABILITY
from seo_scoring.models import ReadabilityAnalysis
from seo_scoring.text_generation import TextGenerator, extract_json_object

logger = logging.getLogger(__name__)

READABILITY_PROMPT = """Analyze the following text for readability. Provide a JSON response with these fields:
- readabilityScore: number from 0-100
- readingLevel: string (Elementary, Middle School, High School, College, Graduate)
- sentenceComplexity: string (Simple, Moderate, Complex)
- vocabularyLevel: string (Basic, Intermediate, Advanced)
- passiveVoicePercentage: number (estimate percentage of passive voice sentences)
- improvementAreas: array of strings with specific suggestions
- analysisSummary: one paragraph summary of the analysis

Content to analyze:
{content}
"""


class ReadabilityParseError(ValueError):
    """Raised when a readability reply lacks a usable score."""


class ReadabilityAnalyzer:
    """Asks a text generator for a readability assessment.

    Never fails: any generator error or unusable reply yields the fixed
    fallback assessment, flagged with is_fallback.
    """

    def __init__(
        self,
        generator: Optional[TextGenerator],
        thresholds: ContentThresholds = default_thresholds,
    ):
        self.generator = generator
        self.thresholds = thresholds

    def build_prompt(self, content: str) -> str:
        return READABILITY_PROMPT.format(
            content=content[:self.thresholds.readability_max_chars]
        )

    def analyze(self, content: str) -> ReadabilityAnalysis:
        """Assess readability of content.

        Args:
            content: Page content; only the first readability_max_chars are sent

        Returns:
            ReadabilityAnalysis (fallback on any failure)
        """
        if self.generator is None:
            logger.warning("No text generator configured; using fallback readability")
            return ReadabilityAnalysis.fallback()

        try:
            reply = self.generator.generate(self.build_prompt(content), temperature=0.1, max_tokens=1000)
            return self.parse_reply(reply)
        except Exception as e:
            logger.warning(f"Readability analysis failed, using fallback: {e}")
            return ReadabilityAnalysis.fallback()

    @staticmethod
    def parse_reply(reply: str) -> ReadabilityAnalysis:
        """Parse the first JSON object of a generator reply.

        Raises:
            ReadabilityParseError: If no object or no numeric score is present
        """
        data = extract_json_object(reply)
        if data is None:
            raise ReadabilityParseError("Invalid LLM response format")

        score = data.get("readabilityScore")
        if not isinstance(score, Number) or isinstance(score, bool):
            raise ReadabilityParseError(f"Missing or non-numeric readabilityScore: {score!r}")

        passive = data.get("passiveVoicePercentage")
        if not isinstance(passive, Number) or isinstance(passive, bool):
            passive = FALLBACK_READABILITY["passive_voice_percentage"]

        improvement_areas = data.get("improvementAreas") or []
        if not isinstance(improvement_areas, list):
            improvement_areas = [str(improvement_areas)]

        return ReadabilityAnalysis(
            readability_score=max(0, min(100, score)),
            reading_level=str(data.get("readingLevel") or FALLBACK_READABILITY["reading_level"]),
            sentence_complexity=str(
                data.get("sentenceComplexity") or FALLBACK_READABILITY["sentence_complexity"]
            ),
            vocabulary_level=str(
                data.get("vocabularyLevel") or FALLBACK_READABILITY["vocabulary_level"]
            ),
            passive_voice_percentage=passive,
            improvement_areas=[str(area) for area in improvement_areas if area],
            analysis_summary=str(data.get("analysisSummary") or ""),
        )
