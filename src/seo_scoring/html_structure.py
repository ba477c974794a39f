"""Structural feature extraction from page HTML."""

from dataclasses import dataclass, field
from typing import List, Tuple

from bs4 import BeautifulSoup

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
LIST_TAGS = ["ul", "ol"]


@dataclass
class ParsedDocument:
    """Headings, paragraphs, lists and images found in one piece of content."""

    headings: List[Tuple[int, str]] = field(default_factory=list)  # (level, text)
    paragraphs: List[str] = field(default_factory=list)
    list_count: int = 0
    image_count: int = 0

    @property
    def heading_texts(self) -> List[str]:
        return [text for _, text in self.headings]

    @property
    def first_paragraph(self) -> str:
        return self.paragraphs[0] if self.paragraphs else ""


def extract_headings(soup: BeautifulSoup) -> List[Tuple[int, str]]:
    """Return (level, text) for every h1-h6 in document order."""
    return [
        (int(tag.name[1]), tag.get_text().strip())
        for tag in soup.find_all(HEADING_TAGS)
    ]


def extract_paragraphs(soup: BeautifulSoup) -> List[str]:
    """Return the text of every non-empty <p>."""
    paragraphs = []
    for tag in soup.find_all("p"):
        text = tag.get_text().strip()
        if text:
            paragraphs.append(text)
    return paragraphs


def count_lists(soup: BeautifulSoup) -> int:
    """Count top-level <ul>/<ol> lists; nested lists belong to their parent."""
    return sum(
        1 for tag in soup.find_all(LIST_TAGS)
        if tag.find_parent(LIST_TAGS) is None
    )


def count_images(soup: BeautifulSoup) -> int:
    return len(soup.find_all("img"))


def parse_document(content: str) -> ParsedDocument:
    """Parse raw HTML (or plain text, which yields no structure).

    Args:
        content: Page HTML or text

    Returns:
        ParsedDocument with the extracted features
    """
    soup = BeautifulSoup(content or "", "html.parser")
    return ParsedDocument(
        headings=extract_headings(soup),
        paragraphs=extract_paragraphs(soup),
        list_count=count_lists(soup),
        image_count=count_images(soup),
    )
