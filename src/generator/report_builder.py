"""Console reports and JSON export for scraped discussions."""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from constants import BUG_REPORT, CLASSIFICATIONS, CLASSIFICATION_EMOJIS, CLASSIFICATION_LABELS
from processor.discussion_classifier import AnalyzedDiscussion, group_by_classification
from scrapers.github_discussions import DiscussionRecord

logger = logging.getLogger("discussion_watch")

# Number of discussions shown in the "all recent" section
LISTING_LIMIT = 10


def _time_label(record: DiscussionRecord) -> str:
    return record.time_text or record.datetime or ""


def format_latest(record: DiscussionRecord, analysis=None, heading: str = "MOST RECENT DISCUSSION") -> str:
    """Format the header block describing a single discussion.

    Args:
        record: The discussion to describe.
        analysis: Optional ClassificationResult to include.
        heading: Section heading text.

    Returns:
        Multi-line string.
    """
    lines = [
        f"=== {heading} ===",
        f"Title: {record.title}",
        f"Author: {record.author}",
        f"Time: {record.datetime} ({record.time_text or 'no relative time'})",
        f"Comments: {record.comment_count}",
    ]
    if analysis is not None:
        lines.append(f"Classification: {analysis.classification} ({analysis.confidence}% confidence)")
    lines.append(f"URL: {record.url}")
    return "\n".join(lines)


def _format_entry(index: int, item: AnalyzedDiscussion, with_emoji: bool) -> List[str]:
    record = item.record
    prefix = f"{CLASSIFICATION_EMOJIS.get(item.analysis.classification, '')} " if with_emoji else ""
    lines = [
        f"{index}. {prefix}{record.title}",
        f"   By: {record.author} | {_time_label(record)} | {record.comment_count} comments",
    ]
    if with_emoji:
        lines.append(f"   Classification: {item.analysis.classification} ({item.analysis.confidence}%)")
    else:
        lines.append(f"   Confidence: {item.analysis.confidence}%")
    lines.append(f"   {record.url}")
    lines.append("")
    return lines


def build_analysis_report(items: Sequence[AnalyzedDiscussion], limit: int = LISTING_LIMIT) -> str:
    """Build the full analysis report for classified discussions.

    Sections: most recent discussion, counts per classification, identified
    bug reports, and the first ``limit`` discussions with their labels.
    Order follows ``items``, which callers pass already sorted by recency.

    Args:
        items: Analyzed discussions, most recent first.
        limit: Number of discussions in the final listing.

    Returns:
        Report text.
    """
    if not items:
        return "No discussions found."

    latest = items[0]
    groups = group_by_classification(items)

    parts = [format_latest(latest.record, latest.analysis), ""]

    parts.append("=== AI ANALYSIS SUMMARY ===")
    for label in CLASSIFICATIONS:
        parts.append(f"{CLASSIFICATION_LABELS[label]}: {len(groups[label])}")
    parts.append("")

    parts.append("=== BUG REPORTS IDENTIFIED ===")
    bug_reports = groups[BUG_REPORT]
    if bug_reports:
        for i, item in enumerate(bug_reports, 1):
            parts.extend(_format_entry(i, item, with_emoji=False))
    else:
        parts.append("No bug reports identified in recent discussions.")
    parts.append("")

    parts.append("=== ALL RECENT DISCUSSIONS WITH ANALYSIS ===")
    for i, item in enumerate(items[:limit], 1):
        parts.extend(_format_entry(i, item, with_emoji=True))

    return "\n".join(parts).rstrip("\n")


def to_serializable(items: Sequence[Union[DiscussionRecord, AnalyzedDiscussion]]) -> List[dict]:
    """Convert records or analyzed discussions to plain dicts."""
    return [item.to_dict() for item in items]


def save_discussions_json(
    items: Sequence[Union[DiscussionRecord, AnalyzedDiscussion]],
    output_path: str,
) -> int:
    """Write discussions to a JSON file (2-space indented array).

    Args:
        items: Records or analyzed discussions.
        output_path: Destination file path.

    Returns:
        Number of discussions written.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_serializable(items), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Saved {len(items)} discussions to {output_path}")
    return len(items)


def load_discussions_json(input_path: str) -> List[DiscussionRecord]:
    """Read records back from a JSON file written by save_discussions_json.

    Entries that are not objects, or lack a title or url, are skipped.

    Raises:
        ValueError: If the file is not valid JSON or not a JSON array.
    """
    data = json.loads(Path(input_path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of discussions, got {type(data).__name__}")

    records = []
    for entry in data:
        if not isinstance(entry, dict):
            logger.debug(f"Skipping non-object entry: {entry!r}")
            continue
        if not entry.get("title") or not entry.get("url"):
            logger.debug(f"Skipping entry without title/url: {entry}")
            continue
        records.append(DiscussionRecord.from_dict(entry))
    return records
