"""RSS feed generation for analyzed discussions using feedgen."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import bleach
from feedgen.feed import FeedGenerator

from constants import CLASSIFICATION_EMOJIS, CLASSIFICATION_LABELS, DEFAULT_DISCUSSIONS_URL
from processor.discussion_classifier import AnalyzedDiscussion
from scrapers.github_discussions import parse_datetime

logger = logging.getLogger("discussion_watch")


def _plain(text: str) -> str:
    """Strip markup from scraped text before it goes into feed HTML."""
    return bleach.clean(text or "", tags=[], strip=True)


class RSSBuilder:
    """Generate an RSS feed from classified discussions."""

    def __init__(
        self,
        title: str = "GitHub Discussions Watch",
        link: str = DEFAULT_DISCUSSIONS_URL,
        description: str = "Recent discussions classified as bug reports, feature requests and questions"
    ):
        """Initialize the RSS builder.

        Args:
            title: Feed title
            link: Feed link URL
            description: Feed description
        """
        self.title = title
        self.link = link
        self.description = description

        self.fg = FeedGenerator()
        self.fg.title(title)
        self.fg.link(href=link, rel="alternate")
        self.fg.description(description)
        self.fg.language("en-us")
        self.fg.lastBuildDate(datetime.now(timezone.utc))

        logger.debug(f"RSSBuilder initialized with title: {title}")

    def _format_title(self, item: AnalyzedDiscussion) -> str:
        """Prefix the title with the classification emoji."""
        emoji = CLASSIFICATION_EMOJIS.get(item.analysis.classification, "")
        if emoji:
            return f"{emoji} {item.record.title}"
        return item.record.title

    def _format_description(self, item: AnalyzedDiscussion) -> str:
        record = item.record
        analysis = item.analysis
        label = CLASSIFICATION_LABELS.get(analysis.classification, analysis.classification)
        return (
            f"<p>Classification: {label} ({analysis.confidence}% confidence)</p>\n"
            f"<p>By {_plain(record.author)} | {_plain(record.comment_count)} comments</p>"
        )

    def add_item(self, item: Optional[AnalyzedDiscussion]) -> None:
        """Add one analyzed discussion to the feed.

        Args:
            item: AnalyzedDiscussion to add
        """
        if not item:
            logger.warning("Attempted to add None item to feed, skipping")
            return

        record = item.record
        entry = self.fg.add_entry()
        entry.title(self._format_title(item))
        entry.link(href=record.url)
        entry.description(self._format_description(item))

        pub_date = parse_datetime(record.datetime)
        if pub_date is None:
            logger.debug(f"No datetime for '{record.title}', using current time")
            pub_date = datetime.now(timezone.utc)
        entry.pubDate(pub_date)

        entry.category(term=item.analysis.classification)
        entry.guid(record.url, permalink=True)

    def create_feed(self, items: Optional[List[AnalyzedDiscussion]] = None) -> str:
        """Generate RSS 2.0 XML.

        Args:
            items: Analyzed discussions, most recent first

        Returns:
            RSS XML string
        """
        items = [item for item in (items or []) if item is not None]

        if not items:
            logger.info("Creating feed with no items")

        # feedgen emits entries in reverse insertion order
        for item in reversed(items):
            try:
                self.add_item(item)
            except Exception as e:
                logger.error(f"Failed to add item '{item.record.title}': {e}")

        if items:
            logger.info(f"Created feed with {len(items)} items")

        return self.fg.rss_str(pretty=True).decode("utf-8")

    def save_feed(self, output_path: str) -> None:
        """Write RSS XML to file.

        Args:
            output_path: Path to write the RSS XML file
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        rss_content = self.fg.rss_str(pretty=True).decode("utf-8")
        path.write_text(rss_content, encoding="utf-8")

        logger.info(f"RSS feed saved to {output_path}")
