"""Tests for structure analysis and HTML feature extraction."""

from seo_scoring.config import ContentThresholds
from seo_scoring.html_structure import parse_document
from seo_scoring.structure import StructureAnalyzer


def paragraphs(count, words_each, word="alpha"):
    return "".join(f"<p>{' '.join([word] * words_each)}</p>" for _ in range(count))


class TestParseDocument:
    """Test cases for HTML feature extraction."""

    def test_headings_in_order(self):
        document = parse_document("<h2>Second</h2><h1> First </h1><h6>Deep</h6>")
        assert document.headings == [(2, "Second"), (1, "First"), (6, "Deep")]

    def test_empty_paragraphs_skipped(self):
        document = parse_document("<p>  </p><p>One two</p><p></p>")
        assert document.paragraphs == ["One two"]
        assert document.first_paragraph == "One two"

    def test_nested_lists_count_once(self):
        document = parse_document("<ul><li>a<ul><li>b</li></ul></li></ul><ol><li>c</li></ol>")
        assert document.list_count == 2

    def test_images(self):
        document = parse_document('<img src="a.png"><p><img src="b.png"/></p>')
        assert document.image_count == 2

    def test_plain_text(self):
        document = parse_document("just some words")
        assert document.headings == []
        assert document.paragraphs == []
        assert document.first_paragraph == ""


class TestStructureAnalyzer:
    """Test cases for StructureAnalyzer."""

    def test_well_structured(self):
        result = StructureAnalyzer().analyze("<h1>Title</h1><h2>Section</h2><p>Some body text here.</p>")

        assert result.heading_structure == "well-structured"
        assert result.structure_score == 100
        assert result.improvement_areas == []
        assert result.heading_count["h1"] == 1
        assert result.heading_count["h2"] == 1

    def test_missing_h1(self):
        result = StructureAnalyzer().analyze("<h2>Intro</h2><p>Some text here.</p>")

        assert result.heading_structure == "needs-improvement"
        assert "Add an H1 heading to your content" in result.improvement_areas
        assert result.structure_score == 75

    def test_multiple_h1(self):
        result = StructureAnalyzer().analyze("<h1>A</h1><h1>B</h1><p>x</p>")

        assert result.improvement_areas == ["Use only one H1 heading per page"]
        assert result.structure_score == 75

    def test_h3_without_h2(self):
        result = StructureAnalyzer().analyze("<h1>T</h1><h3>a</h3><h4>b</h4><p>text</p>")

        assert result.improvement_areas == ["Fix heading hierarchy: H3 used without H2"]
        assert result.structure_score == 75

    def test_h4_without_h3(self):
        result = StructureAnalyzer().analyze("<h1>T</h1><h4>S</h4><p>text</p>")

        assert result.improvement_areas == ["Fix heading hierarchy: H4 used without H3"]

    def test_hierarchy_penalty_applied_once(self):
        result = StructureAnalyzer().analyze("<h3>a</h3>")

        assert len(result.improvement_areas) == 2
        assert result.structure_score == 65

    def test_long_paragraphs(self):
        result = StructureAnalyzer().analyze("<h1>T</h1>" + paragraphs(1, 150, "word"))

        assert result.average_paragraph_length == 150
        assert result.improvement_areas == ["Break up long paragraphs for better readability"]
        assert result.structure_score == 90

    def test_many_short_paragraphs(self):
        result = StructureAnalyzer().analyze("<h1>T</h1>" + paragraphs(12, 5))

        assert result.paragraph_count == 12
        assert result.improvement_areas == ["Consider combining some very short paragraphs"]
        assert result.structure_score == 90

    def test_long_content_needs_lists_and_images(self):
        content = "<h1>T</h1>" + paragraphs(10, 25)
        result = StructureAnalyzer().analyze(content)

        assert result.improvement_areas == [
            "Add bulleted or numbered lists to break up content",
            "Add images to enhance your content",
        ]
        assert result.structure_score == 80

        content += '<ul><li>point</li></ul><img src="chart.png">'
        result = StructureAnalyzer().analyze(content)
        assert result.improvement_areas == []
        assert result.list_count == 1
        assert result.image_count == 1

    def test_average_paragraph_length_rounds_half_up(self):
        result = StructureAnalyzer().analyze("<h1>T</h1><p>one</p><p>one two</p>")
        assert result.average_paragraph_length == 2

    def test_score_floor(self):
        analyzer = StructureAnalyzer(ContentThresholds(structure_issue_penalty=50))
        assert analyzer.analyze("<h3>a</h3>").structure_score == 0

    def test_plain_text(self):
        result = StructureAnalyzer().analyze("just some words")

        assert result.paragraph_count == 0
        assert result.average_paragraph_length == 0
        assert result.improvement_areas == ["Add an H1 heading to your content"]

    def test_idempotent(self):
        content = "<h2>Intro</h2>" + paragraphs(3, 40)
        analyzer = StructureAnalyzer()
        assert analyzer.analyze(content) == analyzer.analyze(content)
