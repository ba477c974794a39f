"""Keyword usage analysis - density, distribution and placement."""

import logging
import math
import re
from typing import List, Optional, Sequence, Tuple

from seo_scoring.config import ContentThresholds, default_thresholds
from seo_scoring.constants import (
    DENSITY_OPTIMAL,
    DENSITY_SPARSE,
    DENSITY_STUFFING,
    DISTRIBUTION_EVEN,
    DISTRIBUTION_SOMEWHAT_EVEN,
    DISTRIBUTION_UNEVEN,
    EXTRACTED_KEYWORD_COUNT,
    KEYWORD_ANALYSIS_UNAVAILABLE,
    KEYWORDS_FROM_TITLE,
    KEYWORDS_GENERATED,
    KEYWORDS_PROVIDED,
    MIN_TITLE_KEYWORD_LENGTH,
    STOP_WORDS,
)
from seo_scoring.html_structure import ParsedDocument, parse_document
from seo_scoring.models import KeywordAnalysis, KeywordDensityEntry
from seo_scoring.text_generation import TextGenerator, extract_json_array

logger = logging.getLogger(__name__)

KEYWORD_EXTRACTION_PROMPT = """Analyze the following content and title. Extract the {count} most important SEO keywords or phrases.
Return them as a JSON array of strings, sorted by importance.

Title: {title}

Content excerpt:
{content}
"""


def keyword_pattern(keyword: str) -> re.Pattern:
    """Case-insensitive whole-word pattern for a keyword or phrase.

    The keyword must not touch a word character on either side, which also
    holds for keywords starting or ending in punctuation ("c++", ".net").
    """
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


def count_occurrences(text: str, keyword: str) -> int:
    return len(keyword_pattern(keyword).findall(text))


def split_into_sections(text: str, section_count: int = 5) -> List[str]:
    """Split text into at most section_count runs of equal word count."""
    words = text.split()
    if not words or section_count < 1:
        return []

    section_size = math.ceil(len(words) / section_count)
    return [
        " ".join(words[i:i + section_size])
        for i in range(0, len(words), section_size)
    ]


def title_keywords(title: str) -> List[str]:
    """Fallback keywords: non-stop-words longer than 3 characters from the title."""
    cleaned = re.sub(r"[^\w\s]", "", title.lower())
    keywords = []
    for word in cleaned.split():
        if len(word) > MIN_TITLE_KEYWORD_LENGTH and word not in STOP_WORDS and word not in keywords:
            keywords.append(word)
    return keywords


class KeywordAnalyzer:
    """Analyzes how target keywords are used across the content."""

    def __init__(
        self,
        generator: Optional[TextGenerator],
        thresholds: ContentThresholds = default_thresholds,
    ):
        self.generator = generator
        self.thresholds = thresholds

    def extract_keywords(self, content: str, title: str) -> Tuple[List[str], str]:
        """Ask the text generator for keywords, falling back to the title.

        Args:
            content: Page content; only the first keyword_extraction_max_chars are sent
            title: Page title

        Returns:
            Tuple of (keywords, keywords_source)
        """
        if self.generator is None:
            return title_keywords(title), KEYWORDS_FROM_TITLE

        prompt = KEYWORD_EXTRACTION_PROMPT.format(
            count=EXTRACTED_KEYWORD_COUNT,
            title=title,
            content=content[:self.thresholds.keyword_extraction_max_chars],
        )

        try:
            reply = self.generator.generate(prompt, temperature=0.1, max_tokens=300)
            keywords = extract_json_array(reply)
            if keywords is None:
                raise ValueError("Invalid LLM response format")
        except Exception as e:
            logger.warning(f"Keyword extraction failed, using title words: {e}")
            return title_keywords(title), KEYWORDS_FROM_TITLE

        return [str(kw).strip() for kw in keywords if str(kw).strip()], KEYWORDS_GENERATED

    def analyze(
        self,
        content: str,
        title: str,
        target_keywords: Optional[Sequence[str]] = None,
        document: Optional[ParsedDocument] = None,
    ) -> KeywordAnalysis:
        """Analyze keyword usage for the primary (first) and secondary keywords.

        Args:
            content: Page HTML or text
            title: Page title
            target_keywords: Ordered keywords; extracted when None
            document: Already-parsed content, parsed here when omitted

        Returns:
            KeywordAnalysis; an empty analysis when no keywords are available
        """
        if target_keywords is None:
            keywords, source = self.extract_keywords(content, title)
        else:
            keywords = [kw.strip() for kw in target_keywords if kw and kw.strip()]
            source = KEYWORDS_PROVIDED

        if not keywords:
            logger.warning("No keywords available for analysis")
            return KeywordAnalysis.empty(KEYWORD_ANALYSIS_UNAVAILABLE)

        if document is None:
            document = parse_document(content)

        normalized_content = content.lower()
        total_words = len(normalized_content.split())
        primary_keyword = keywords[0].lower()

        density_entries = [self._density_entry(kw, normalized_content, total_words) for kw in keywords]
        keyword_density = {entry.keyword: entry.density_percent for entry in density_entries}

        primary_usage = density_entries[0].occurrences
        secondary_usage = [entry.occurrences for entry in density_entries[1:]]

        keyword_in_title = primary_keyword in title.lower()
        keyword_in_headings = sum(
            1 for heading in document.heading_texts if primary_keyword in heading.lower()
        )
        keyword_in_first_paragraph = primary_keyword in document.first_paragraph.lower()
        distribution = self._classify_distribution(normalized_content, primary_keyword)

        improvement_areas = self._improvement_areas(
            keyword=keywords[0],
            in_title=keyword_in_title,
            in_headings=keyword_in_headings,
            in_first_paragraph=keyword_in_first_paragraph,
            distribution=distribution,
            usage=primary_usage,
            total_words=total_words,
        )

        return KeywordAnalysis(
            keyword_density=keyword_density,
            density_entries=density_entries,
            keyword_distribution=distribution,
            primary_keyword=keywords[0],
            primary_keyword_usage=primary_usage,
            secondary_keyword_usage=secondary_usage,
            keyword_in_title=keyword_in_title,
            keyword_in_headings=keyword_in_headings,
            keyword_in_first_paragraph=keyword_in_first_paragraph,
            improvement_areas=improvement_areas,
            keywords_source=source,
        )

    def _density_entry(self, keyword: str, normalized_content: str, total_words: int) -> KeywordDensityEntry:
        occurrences = count_occurrences(normalized_content, keyword)
        density = round(occurrences / total_words * 100, 2) if total_words else 0.0

        if density > self.thresholds.keyword_stuffing_density:
            status = DENSITY_STUFFING
        elif density < self.thresholds.keyword_sparse_density:
            status = DENSITY_SPARSE
        else:
            status = DENSITY_OPTIMAL

        return KeywordDensityEntry(
            keyword=keyword,
            occurrences=occurrences,
            density_percent=density,
            status=status,
        )

    def _classify_distribution(self, normalized_content: str, primary_keyword: str) -> str:
        """Bucket how many equal-size sections mention the primary keyword."""
        sections = split_into_sections(normalized_content, self.thresholds.distribution_sections)
        if not sections:
            return DISTRIBUTION_UNEVEN

        pattern = keyword_pattern(primary_keyword)
        sections_with_keyword = sum(1 for section in sections if pattern.search(section))
        ratio = sections_with_keyword / len(sections)

        if ratio >= self.thresholds.distribution_even_ratio:
            return DISTRIBUTION_EVEN
        if ratio >= self.thresholds.distribution_somewhat_even_ratio:
            return DISTRIBUTION_SOMEWHAT_EVEN
        return DISTRIBUTION_UNEVEN

    def _improvement_areas(
        self,
        keyword: str,
        in_title: bool,
        in_headings: int,
        in_first_paragraph: bool,
        distribution: str,
        usage: int,
        total_words: int,
    ) -> List[str]:
        areas = []

        if not in_title:
            areas.append(f'Add the primary keyword "{keyword}" to the title')
        if in_headings == 0:
            areas.append("Include the primary keyword in at least one heading")
        if not in_first_paragraph:
            areas.append("Add the primary keyword to the first paragraph")
        if distribution == DISTRIBUTION_UNEVEN:
            areas.append("Distribute the primary keyword more evenly throughout the content")

        if usage == 0:
            areas.append(f'Add the primary keyword "{keyword}" to your content')
        elif usage > total_words * self.thresholds.keyword_stuffing_density / 100:
            areas.append("Reduce the usage of the primary keyword to avoid keyword stuffing")
        elif (
            usage < self.thresholds.keyword_min_occurrences
            and total_words > self.thresholds.keyword_underuse_min_words
        ):
            areas.append(
                "Increase the usage of the primary keyword "
                "(aim for 3-5 occurrences per 1000 words)"
            )

        return areas
