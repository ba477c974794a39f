"""Command-line interface for the SEO scoring core."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from seo_scoring.config import Config, ContentThresholds, settings
from seo_scoring.content_analyzer import ContentAnalyzer
from seo_scoring.grading import GradingSystem
from seo_scoring.logging_config import setup_logging
from seo_scoring.storage import get_store_client
from seo_scoring.text_generation import LLMClient


def print_content_analysis(result) -> None:
    """Print a content analysis in a formatted way.

    Args:
        result: ContentAnalysisResult object
    """
    grade = GradingSystem.get_grade(result.content_score)
    readability = result.readability_analysis
    keywords = result.keyword_analysis
    structure = result.structure_analysis

    print(f"\n{'=' * 60}")
    print(f"Content Analysis ({result.content_hash})")
    print(f"{'=' * 60}")
    print(f"\n📊 Content Score: {result.content_score}/100 (Grade {grade.letter} - {grade.label})")
    if result.from_cache:
        print("   (returned from a previous analysis)")
    print(f"\nDetailed Scores:")
    print(f"  • Readability: {readability.readability_score}/100 ({readability.reading_level})")
    print(f"  • Structure: {structure.structure_score}/100 ({structure.heading_structure})")
    if keywords.has_keywords:
        print(
            f"  • Primary keyword: \"{keywords.primary_keyword}\" "
            f"{keywords.keyword_density.get(keywords.primary_keyword, 0)}% density, "
            f"{keywords.keyword_distribution} distribution"
        )

    if result.degraded:
        print(f"\n⚠️  Degraded analysis:")
        for reason in result.fallback_reasons:
            print(f"  • {reason}")

    if result.recommendations:
        print(f"\n💡 Recommendations:")
        for rec in result.recommendations:
            print(f"  • {rec}")

    print(f"\n{'=' * 60}\n")


def grade_command(args) -> int:
    """Print the letter grade for a score."""
    grade = GradingSystem.get_grade(args.score)
    print(f"{args.score}: {grade.letter} ({grade.label}, {grade.color})")
    print(GradingSystem.get_recommended_action(grade.letter))
    return 0


def normalize_command(args) -> int:
    """Print the normalized score of a raw metric value."""
    if args.higher_better:
        score = GradingSystem.normalize_score_higher_better(
            args.value, args.critical, args.warning, args.ideal
        )
    else:
        score = GradingSystem.normalize_score_lower_better(
            args.value, args.ideal, args.warning, args.critical
        )
    print(score)
    return 0


def analyze_command(args) -> int:
    """Analyze a content file."""
    if not settings.LLM_API_KEY:
        print(
            "Error: LLM API key is required. Set LLM_API_KEY in .env file or environment variable"
        )
        return 1

    content = Path(args.file).read_text(encoding="utf-8")
    thresholds = ContentThresholds.from_file(args.thresholds) if args.thresholds else ContentThresholds.from_env()

    config = Config.from_env()
    try:
        generator = LLMClient(
            api_key=settings.LLM_API_KEY,
            model=settings.LLM_MODEL,
            provider=settings.LLM_PROVIDER,
            max_retries=config.llm_max_retries,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    store = get_store_client(db_url=args.db) if args.db else get_store_client()

    try:
        analyzer = ContentAnalyzer(generator=generator, store=store, thresholds=thresholds)
        result = analyzer.analyze_content(
            content,
            args.title,
            target_keywords=args.keywords,
            content_id=args.content_id,
        )
    finally:
        store.close()

    if result is None:
        print(f"\n❌ Analysis unavailable for {args.file}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_content_analysis(result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SEO Scoring - Grade metrics and analyze on-page content"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.upper() if settings.LOG_LEVEL else "INFO",
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    grade_parser = subparsers.add_parser("grade", help="Show the letter grade for a score.")
    grade_parser.add_argument("score", type=float, help="Score, normally 0-100")
    grade_parser.set_defaults(func=grade_command)

    normalize_parser = subparsers.add_parser(
        "normalize", help="Normalize a raw metric value to 0-100."
    )
    normalize_parser.add_argument("value", type=float)
    normalize_parser.add_argument("ideal", type=float)
    normalize_parser.add_argument("warning", type=float)
    normalize_parser.add_argument("critical", type=float)
    normalize_parser.add_argument(
        "--higher-better",
        action="store_true",
        help="Treat larger values as better (default: lower is better)",
    )
    normalize_parser.set_defaults(func=normalize_command)

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze the content of an HTML or text file."
    )
    analyze_parser.add_argument("file", help="File containing page HTML or text")
    analyze_parser.add_argument("--title", required=True, help="Page title")
    analyze_parser.add_argument(
        "--keyword",
        "-k",
        dest="keywords",
        action="append",
        help="Target keyword; repeat for more, primary first (default: extracted)",
    )
    analyze_parser.add_argument("--content-id", help="Identifier stored with the analysis")
    analyze_parser.add_argument("--db", help="Database URL (default: DATABASE_URL)")
    analyze_parser.add_argument("--thresholds", help="JSON file with content thresholds")
    analyze_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    analyze_parser.set_defaults(func=analyze_command)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging based on flags
    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        return args.func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
