#!/usr/bin/env python3
"""Discussion Watch - Main Entry Point.

Scrapes a discussions listing page, classifies each discussion and
prints/persists the result.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

# Add src directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from constants import DEFAULT_DISCUSSIONS_URL
from utils.logger import setup_logger
from scrapers.github_discussions import (
    DiscussionRecord,
    extract_discussions,
    filter_recent,
    sort_by_recency,
)
from scrapers.browser_source import BrowserPageSource
from scrapers.static_source import StaticPageSource
from processor.discussion_classifier import AnalyzedDiscussion, classify_all
from generator.report_builder import build_analysis_report, save_discussions_json
from generator.rss_builder import RSSBuilder

# Read version from VERSION file
_version_file = Path(__file__).parent.parent / "VERSION"
__version__ = _version_file.read_text().strip() if _version_file.exists() else "0.0.0"

PageSource = Union[BrowserPageSource, StaticPageSource]


def env_flag(name: str, default: bool = True) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def open_source(
    url: Optional[str] = None,
    html_file: Optional[str] = None,
    static: bool = False,
    headless: Optional[bool] = None,
) -> PageSource:
    """Pick the page source for this run.

    Args:
        url: Listing page URL (default: DISCUSSIONS_URL env var).
        html_file: Saved page to parse instead of fetching.
        static: Fetch with a plain HTTP GET instead of a browser.
        headless: Browser headless flag (default: HEADLESS env var).

    Returns:
        A page source usable as a context manager.
    """
    url = url or os.getenv("DISCUSSIONS_URL", DEFAULT_DISCUSSIONS_URL)
    if html_file:
        return StaticPageSource.from_file(html_file, url=url)
    if static:
        return StaticPageSource(url=url)
    if headless is None:
        headless = env_flag("HEADLESS", True)
    return BrowserPageSource(url=url, headless=headless)


def log_selector_probe(source: PageSource) -> dict:
    """Log what broader selectors find when no discussions were extracted."""
    import logging
    logger = logging.getLogger("discussion_watch")

    report = source.probe_selectors()
    logger.warning("No discussions found. Probing page structure...")
    logger.info(f"Found {report.get('box_rows', 0)} li.Box-row elements")
    logger.info(f"Found {report.get('title_links', 0)} markdown-title links")
    logger.info(f"Found {report.get('discussion_links', 0)} discussion links")
    for link in report.get("sample_links", []):
        logger.info(f"  {link['text']} -> {link['href']}")
    return report


def scrape_discussions(source: PageSource) -> List[DiscussionRecord]:
    """Extract discussions from a page source, most recent first.

    Args:
        source: Open page source.

    Returns:
        Sorted list of DiscussionRecord objects (possibly empty).
    """
    records = extract_discussions(source.list_items())
    if not records:
        log_selector_probe(source)
        return []
    return sort_by_recency(records)


def run_fetch(source: PageSource, output_path: str, days: int = 30) -> List[DiscussionRecord]:
    """Scrape, keep the last N days and save them as JSON.

    An empty array is written when nothing is found or scraping fails.

    Args:
        source: Open page source.
        output_path: JSON destination.
        days: Recent window in days.

    Returns:
        The saved records, most recent first.
    """
    import logging
    logger = logging.getLogger("discussion_watch")

    try:
        discussions = scrape_discussions(source)
    except Exception as e:
        logger.error(f"Error occurred while scraping: {e}", exc_info=True)
        source.capture_debug_info()
        discussions = []

    recent = filter_recent(discussions, days=days)
    logger.info(
        f"Found {len(recent)} discussions from the last {days} days out of {len(discussions)} total"
    )

    save_discussions_json(recent, output_path)
    return recent


def run_analyze(
    source: PageSource,
    output_path: Optional[str] = None,
    feed_path: Optional[str] = None,
) -> List[AnalyzedDiscussion]:
    """Scrape and classify every discussion.

    Args:
        source: Open page source.
        output_path: Optional JSON destination for the analyzed discussions.
        feed_path: Optional RSS destination.

    Returns:
        Analyzed discussions, most recent first.
    """
    analyzed = classify_all(scrape_discussions(source))

    if output_path:
        save_discussions_json(analyzed, output_path)

    if feed_path:
        builder = RSSBuilder(link=source.url)
        builder.create_feed(analyzed)
        builder.save_feed(feed_path)

    return analyzed


def main():
    """Default workflow - scrape, classify and print the analysis report."""

    logger = setup_logger(
        log_file=os.getenv("LOG_FILE", "logs/discussions.log")
    )

    logger.info("=" * 50)
    logger.info(f"Discussion Watch v{__version__} started at {datetime.now()}")
    logger.info("=" * 50)

    try:
        with open_source() as source:
            analyzed = run_analyze(
                source,
                output_path=os.getenv("DISCUSSIONS_OUTPUT"),
                feed_path=os.getenv("FEED_OUTPUT"),
            )
        print(build_analysis_report(analyzed))
    except Exception as e:
        logger.error(f"Error during analysis: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
