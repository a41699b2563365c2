"""Page sources and record extraction for the discussions listing page."""

from .github_discussions import DiscussionRecord, extract_discussions, sort_by_recency, filter_recent
from .browser_source import BrowserPageSource
from .static_source import StaticPageSource

__all__ = [
    "DiscussionRecord",
    "extract_discussions",
    "sort_by_recency",
    "filter_recent",
    "BrowserPageSource",
    "StaticPageSource",
]
