"""Extraction of discussion records from a discussions listing page."""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import cmp_to_key
from typing import Any, Iterable, List, Optional
from urllib.parse import urljoin

from constants import (
    AUTHOR_SELECTOR,
    COMMENT_SELECTOR,
    DEFAULT_AUTHOR,
    DEFAULT_COMMENT_COUNT,
    TIME_SELECTOR,
    TITLE_SELECTOR,
)

logger = logging.getLogger("discussion_watch")

_TZ_OFFSET = re.compile(r"([+-]\d{2}):?(\d{2})$")
_FRACTION = re.compile(r"\.(\d+)")


@dataclass(frozen=True)
class LinkElement:
    """Text and resolved href of an anchor inside a list item."""

    text: str
    href: str


@dataclass(frozen=True)
class TimeElement:
    """A <relative-time> element: machine datetime plus display text."""

    datetime: Optional[str]
    text: str


@dataclass(frozen=True)
class DiscussionRecord:
    """A single discussion scraped from the listing page."""

    title: str
    url: str
    author: str = DEFAULT_AUTHOR
    datetime: Optional[str] = None
    time_text: Optional[str] = None
    comment_count: str = DEFAULT_COMMENT_COUNT

    def to_dict(self) -> dict:
        """Return the record with its persisted (camelCase) field names."""
        return {
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "datetime": self.datetime,
            "timeText": self.time_text,
            "commentCount": self.comment_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiscussionRecord":
        """Build a record from a persisted dict, applying field defaults."""
        return cls(
            title=data["title"],
            url=data["url"],
            author=data.get("author") or DEFAULT_AUTHOR,
            datetime=data.get("datetime"),
            time_text=data.get("timeText"),
            comment_count=str(data.get("commentCount") or DEFAULT_COMMENT_COUNT),
        )


class ListItemHandle(ABC):
    """One discussion list item as exposed by a page source.

    Subclasses adapt a concrete element type (Playwright handle, BeautifulSoup
    tag, ...) by implementing the three primitives below. Every lookup returns
    None when the sub-element is not present.
    """

    def __init__(self, base_url: str = ""):
        self.base_url = base_url

    @abstractmethod
    def _select(self, selector: str) -> Optional[Any]:
        """Return the first sub-element matching selector, or None."""

    @abstractmethod
    def _text(self, element: Any) -> str:
        """Return the text content of element."""

    @abstractmethod
    def _attr(self, element: Any, name: str) -> Optional[str]:
        """Return attribute name of element, or None."""

    def _link(self, selector: str) -> Optional[LinkElement]:
        element = self._select(selector)
        if element is None:
            return None
        href = self._attr(element, "href") or ""
        if href and self.base_url:
            href = urljoin(self.base_url, href)
        return LinkElement(text=self._text(element).strip(), href=href)

    def title_link(self) -> Optional[LinkElement]:
        return self._link(TITLE_SELECTOR)

    def author_link(self) -> Optional[LinkElement]:
        return self._link(AUTHOR_SELECTOR)

    def comment_link(self) -> Optional[LinkElement]:
        return self._link(COMMENT_SELECTOR)

    def time_element(self) -> Optional[TimeElement]:
        element = self._select(TIME_SELECTOR)
        if element is None:
            return None
        return TimeElement(
            datetime=self._attr(element, "datetime"),
            text=self._text(element).strip(),
        )


def _text_or(link: Optional[LinkElement], default: Optional[str]) -> Optional[str]:
    return link.text if link is not None else default


def extract_discussion(item: ListItemHandle) -> Optional[DiscussionRecord]:
    """Map one list item to a record, or None when it has no usable title link.

    Args:
        item: List item handle from a page source.

    Returns:
        DiscussionRecord, or None if the title link is missing or empty.
    """
    title_link = item.title_link()
    if title_link is None or not title_link.text or not title_link.href:
        return None

    time_el = item.time_element()

    return DiscussionRecord(
        title=title_link.text,
        url=title_link.href,
        author=_text_or(item.author_link(), DEFAULT_AUTHOR),
        datetime=time_el.datetime if time_el else None,
        time_text=time_el.text if time_el else None,
        comment_count=_text_or(item.comment_link(), DEFAULT_COMMENT_COUNT),
    )


def extract_discussions(items: Iterable[ListItemHandle]) -> List[DiscussionRecord]:
    """Extract records from list items, preserving order.

    Items without a title link are left out rather than reported as errors.

    Args:
        items: List item handles in page order.

    Returns:
        List of DiscussionRecord objects (possibly empty).
    """
    records = []
    skipped = 0
    for item in items:
        record = extract_discussion(item)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.debug(f"Skipped {skipped} list items without a title link")
    logger.debug(f"Extracted {len(records)} discussions")
    return records


def _normalize_iso(value: str) -> str:
    """Rewrite ISO 8601 variants into the form datetime.fromisoformat accepts.

    Handles a trailing "Z", offsets without a colon ("+0000") and fractions
    that are not exactly six digits.
    """
    value = value.strip()
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    date_part, sep, time_part = value.partition("T")
    if sep:
        time_part = _TZ_OFFSET.sub(r"\1:\2", time_part)
        time_part = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), time_part)
    return date_part + sep + time_part


def parse_datetime(dt_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as found in <relative-time datetime="...">.

    Args:
        dt_string: Timestamp string, e.g. "2024-06-01T10:30:00Z".

    Returns:
        Timezone-aware datetime, or None if missing or unparseable.
    """
    if not dt_string:
        return None
    try:
        parsed = datetime.fromisoformat(_normalize_iso(dt_string))
    except ValueError:
        logger.debug(f"Could not parse datetime '{dt_string}'")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _compare_recency(a: DiscussionRecord, b: DiscussionRecord) -> int:
    # Pairs missing a datetime on either side compare equal.
    a_dt = parse_datetime(a.datetime)
    b_dt = parse_datetime(b.datetime)
    if a_dt is None or b_dt is None:
        return 0
    if a_dt > b_dt:
        return -1
    if a_dt < b_dt:
        return 1
    return 0


def sort_by_recency(records: Iterable[DiscussionRecord]) -> List[DiscussionRecord]:
    """Return records ordered most recent first (stable).

    Args:
        records: Extracted records.

    Returns:
        New list sorted by datetime descending.
    """
    return sorted(records, key=cmp_to_key(_compare_recency))


def filter_recent(
    records: Iterable[DiscussionRecord],
    days: int = 30,
    now: Optional[datetime] = None,
) -> List[DiscussionRecord]:
    """Keep records posted within the last N days.

    Records without a parseable datetime are dropped.

    Args:
        records: Records to filter.
        days: Size of the window in days (default: 30).
        now: Reference time (default: current UTC time).

    Returns:
        Filtered list, order preserved.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    cutoff = now - timedelta(days=days)
    recent = []
    for record in records:
        posted = parse_datetime(record.datetime)
        if posted is not None and posted >= cutoff:
            recent.append(record)
    return recent
