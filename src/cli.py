"""Command-line interface for discussion-watch."""

import argparse
import logging
import os
import sys
from typing import Optional

from main import open_source, run_analyze, run_fetch, scrape_discussions
from constants import DEFAULT_DISCUSSIONS_URL
from utils.logger import setup_logger
from processor.discussion_classifier import classify_all, classify_discussion
from generator.report_builder import (
    LISTING_LIMIT,
    build_analysis_report,
    format_latest,
    load_discussions_json,
    save_discussions_json,
)

logger = logging.getLogger("discussion_watch")

DEFAULT_RECENT_DAYS = 30


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--url', help=f'Listing page URL (default: $DISCUSSIONS_URL or {DEFAULT_DISCUSSIONS_URL})')
    parser.add_argument('--html', metavar='FILE', help='Parse a saved HTML page instead of fetching')
    parser.add_argument('--static', action='store_true', help='Fetch with plain HTTP instead of a browser')
    parser.add_argument('--headed', action='store_true', help='Show the browser window')


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='discussion-watch',
        description='Scrape and classify discussions from a listing page'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # fetch
    fetch_parser = subparsers.add_parser('fetch', help='Save recent discussions to JSON')
    _add_source_arguments(fetch_parser)
    fetch_parser.add_argument('--output', help='JSON output path (default: $DISCUSSIONS_OUTPUT or discussions.json)')
    fetch_parser.add_argument('--days', type=int, help='Only keep discussions from the last N days (default: $RECENT_DAYS or 30)')

    # analyze
    analyze_parser = subparsers.add_parser('analyze', help='Classify discussions and print a report')
    _add_source_arguments(analyze_parser)
    analyze_parser.add_argument('--output', help='Also save analyzed discussions to JSON')
    analyze_parser.add_argument('--feed', metavar='PATH', help='Also write an RSS feed')
    analyze_parser.add_argument('--limit', type=int, default=LISTING_LIMIT, help='Discussions in the full listing')

    # latest
    latest_parser = subparsers.add_parser('latest', help='Show the most recent discussion')
    _add_source_arguments(latest_parser)

    # classify
    classify_parser = subparsers.add_parser('classify', help='Classify a title or a saved JSON file')
    classify_parser.add_argument('title', nargs='?', help='Discussion title to classify')
    classify_parser.add_argument('--comments', default='0', help='Comment count for the title')
    classify_parser.add_argument('--input', metavar='FILE', help='Classify every discussion in a JSON file')
    classify_parser.add_argument('--output', metavar='FILE', help='Save analyzed discussions to JSON')

    return parser


def _source_from_args(parsed: argparse.Namespace):
    """Open the page source named by the arguments, or None if it cannot be read."""
    try:
        return open_source(
            url=parsed.url,
            html_file=parsed.html,
            static=parsed.static,
            headless=False if parsed.headed else None,
        )
    except OSError as e:
        print(f"Error: Could not read {parsed.html}: {e}")
        return None


def _recent_days(parsed: argparse.Namespace) -> int:
    if parsed.days is not None:
        return parsed.days
    value = os.getenv('RECENT_DAYS', str(DEFAULT_RECENT_DAYS))
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid RECENT_DAYS '{value}', using {DEFAULT_RECENT_DAYS}")
        return DEFAULT_RECENT_DAYS


def handle_fetch(parsed: argparse.Namespace) -> int:
    """Handle fetch command.

    Returns:
        Exit code.
    """
    output = parsed.output or os.getenv('DISCUSSIONS_OUTPUT', 'discussions.json')
    days = _recent_days(parsed)

    source = _source_from_args(parsed)
    if source is None:
        return 1

    with source:
        recent = run_fetch(source, output, days=days)

    if not recent:
        print(f"No discussions found from the last {days} days.")
        return 0

    print(format_latest(recent[0], heading=f"MOST RECENT DISCUSSION (LAST {days} DAYS)"))
    return 0


def handle_analyze(parsed: argparse.Namespace) -> int:
    """Handle analyze command."""
    source = _source_from_args(parsed)
    if source is None:
        return 1

    with source:
        analyzed = run_analyze(source, output_path=parsed.output, feed_path=parsed.feed)

    print(build_analysis_report(analyzed, limit=parsed.limit))
    return 0 if analyzed else 1


def handle_latest(parsed: argparse.Namespace) -> int:
    """Handle latest command."""
    source = _source_from_args(parsed)
    if source is None:
        return 1

    with source:
        discussions = scrape_discussions(source)

    if not discussions:
        print("Could not extract discussion details.")
        return 1

    print(format_latest(discussions[0]))
    return 0


def handle_classify(parsed: argparse.Namespace) -> int:
    """Handle classify command."""
    if parsed.input:
        try:
            records = load_discussions_json(parsed.input)
        except (OSError, ValueError) as e:
            print(f"Error: Could not read {parsed.input}: {e}")
            return 1

        analyzed = classify_all(records)
        if parsed.output:
            save_discussions_json(analyzed, parsed.output)
        print(build_analysis_report(analyzed))
        return 0

    if not parsed.title:
        print("Error: Provide a title or --input FILE")
        return 1

    result = classify_discussion(parsed.title, parsed.comments)
    print(f"Classification: {result.classification} ({result.confidence}% confidence)")
    print(
        f"Scores: bug={result.bug_score} feature={result.feature_score} "
        f"question={result.question_score}"
    )
    return 0


HANDLERS = {
    'fetch': handle_fetch,
    'analyze': handle_analyze,
    'latest': handle_latest,
    'classify': handle_classify,
}


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    setup_logger(
        log_file=os.getenv('LOG_FILE', 'logs/discussions.log'),
        level=logging.DEBUG if parsed.verbose else logging.INFO,
    )

    return HANDLERS[parsed.command](parsed)


if __name__ == '__main__':
    sys.exit(main())
