"""Heading hierarchy and layout analysis."""

from typing import List, Optional

from seo_scoring.config import ContentThresholds, default_thresholds
from seo_scoring.constants import (
    HEADING_LEVELS,
    HEADING_STRUCTURE_NEEDS_IMPROVEMENT,
    HEADING_STRUCTURE_OK,
)
from seo_scoring.grading import round_half_up
from seo_scoring.html_structure import ParsedDocument, parse_document
from seo_scoring.models import StructureAnalysis, StructureCounts


class StructureAnalyzer:
    """Scores content structure from its headings, paragraphs, lists and images.

    A pure function of the content: no external calls, no failure path.
    """

    def __init__(self, thresholds: ContentThresholds = default_thresholds):
        self.thresholds = thresholds

    @staticmethod
    def count_structure(document: ParsedDocument) -> StructureCounts:
        """Tally structural features of a parsed document."""
        heading_count = {level: 0 for level in HEADING_LEVELS}
        for level, _ in document.headings:
            heading_count[f"h{level}"] += 1

        total_paragraph_words = sum(len(p.split()) for p in document.paragraphs)
        average_length = (
            round_half_up(total_paragraph_words / len(document.paragraphs))
            if document.paragraphs else 0
        )

        return StructureCounts(
            heading_count=heading_count,
            paragraph_count=len(document.paragraphs),
            average_paragraph_length=average_length,
            list_count=document.list_count,
            image_count=document.image_count,
        )

    def analyze(self, content: str, document: Optional[ParsedDocument] = None) -> StructureAnalysis:
        """Analyze content structure.

        Args:
            content: Page HTML
            document: Already-parsed content, parsed here when omitted

        Returns:
            StructureAnalysis with score and improvement areas
        """
        if document is None:
            document = parse_document(content)

        counts = self.count_structure(document)
        headings = counts.heading_count
        areas: List[str] = []
        hierarchy_ok = True

        if headings["h1"] == 0:
            areas.append("Add an H1 heading to your content")
            hierarchy_ok = False
        elif headings["h1"] > 1:
            areas.append("Use only one H1 heading per page")
            hierarchy_ok = False

        if headings["h3"] > 0 and headings["h2"] == 0:
            areas.append("Fix heading hierarchy: H3 used without H2")
            hierarchy_ok = False

        if headings["h4"] > 0 and headings["h3"] == 0:
            areas.append("Fix heading hierarchy: H4 used without H3")
            hierarchy_ok = False

        if counts.average_paragraph_length > self.thresholds.long_paragraph_words:
            areas.append("Break up long paragraphs for better readability")
        elif (
            counts.average_paragraph_length < self.thresholds.short_paragraph_words
            and counts.paragraph_count > self.thresholds.many_paragraphs
        ):
            areas.append("Consider combining some very short paragraphs")

        is_long = len(content) > self.thresholds.long_content_chars
        if counts.list_count == 0 and is_long:
            areas.append("Add bulleted or numbered lists to break up content")
        if counts.image_count == 0 and is_long:
            areas.append("Add images to enhance your content")

        score = 100 - len(areas) * self.thresholds.structure_issue_penalty
        if not hierarchy_ok:
            score -= self.thresholds.heading_hierarchy_penalty

        return StructureAnalysis(
            heading_structure=HEADING_STRUCTURE_OK if hierarchy_ok else HEADING_STRUCTURE_NEEDS_IMPROVEMENT,
            heading_count=counts.heading_count,
            paragraph_count=counts.paragraph_count,
            average_paragraph_length=counts.average_paragraph_length,
            list_count=counts.list_count,
            image_count=counts.image_count,
            structure_score=max(0, min(100, score)),
            improvement_areas=areas,
        )
