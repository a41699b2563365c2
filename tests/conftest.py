"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


LISTING_URL = "https://github.com/orgs/community/discussions/categories/models"

LISTING_HTML = """<!DOCTYPE html>
<html>
<head><title>Models · community · Discussions · GitHub</title></head>
<body>
<ul>
  <li class="Box-row js-navigation-item">
    <a class="markdown-title discussion-Link--secondary" href="/orgs/community/discussions/101">
      App crashes on startup
    </a>
    <a class="Link--muted Link--inTextBlock" href="/octocat" aria-label="octocat is the author">octocat</a>
    <relative-time datetime="2024-01-01T10:00:00Z">Jan 1, 2024</relative-time>
    <a href="/orgs/community/discussions/101#comments" aria-label="3 comments"> 3 </a>
  </li>
  <li class="Box-row js-navigation-item">
    <a class="markdown-title discussion-Link--secondary" href="/orgs/community/discussions/102">Feature request: add dark mode</a>
    <relative-time datetime="2024-06-01T08:30:00Z">Jun 1, 2024</relative-time>
    <a href="/orgs/community/discussions/102#comments" aria-label="12 comments">12</a>
  </li>
  <li class="Box-row js-navigation-item">
    <span>Pinned announcement without a title link</span>
  </li>
  <li class="Box-row js-navigation-item">
    <a class="markdown-title discussion-Link--secondary" href="https://github.com/orgs/community/discussions/103">  How to configure X?  </a>
    <a class="Link--muted Link--inTextBlock" href="/hubot" aria-label="hubot is the author"> hubot </a>
  </li>
</ul>
</body>
</html>
"""

EMPTY_LISTING_HTML = """<html>
<head><title>Discussions</title></head>
<body>
<ul>
  <li class="Box-row"><a class="markdown-title" href="/orgs/community/discussions/7">Redesigned row</a></li>
  <li>Footer</li>
</ul>
</body>
</html>
"""


class FakeListItem:
    """List item handle returning canned lookups."""

    def __init__(self, title=None, author=None, time=None, comments=None):
        from scrapers.github_discussions import LinkElement, TimeElement

        self._title = LinkElement(*title) if title else None
        self._author = LinkElement(author, f"/{author}") if author is not None else None
        self._time = TimeElement(*time) if time else None
        self._comments = LinkElement(comments, "#comments") if comments is not None else None

    def title_link(self):
        return self._title

    def author_link(self):
        return self._author

    def time_element(self):
        return self._time

    def comment_link(self):
        return self._comments


@pytest.fixture
def make_item():
    """Factory for fake list items."""
    return FakeListItem


@pytest.fixture
def listing_url():
    return LISTING_URL


@pytest.fixture
def listing_html():
    return LISTING_HTML


@pytest.fixture
def empty_listing_html():
    return EMPTY_LISTING_HTML


@pytest.fixture
def listing_file(tmp_path):
    """Saved listing page on disk."""
    path = tmp_path / "listing.html"
    path.write_text(LISTING_HTML, encoding="utf-8")
    return path


@pytest.fixture
def sample_records():
    """Three records, most recent first."""
    from scrapers.github_discussions import DiscussionRecord

    return [
        DiscussionRecord(
            title="Error: broken and not working",
            url="https://github.com/orgs/community/discussions/3",
            author="alice",
            datetime="2024-06-03T12:00:00Z",
            time_text="Jun 3, 2024",
            comment_count="10",
        ),
        DiscussionRecord(
            title="Feature request: add dark mode",
            url="https://github.com/orgs/community/discussions/2",
            author="bob",
            datetime="2024-06-02T12:00:00Z",
            time_text="Jun 2, 2024",
            comment_count="0",
        ),
        DiscussionRecord(
            title="Just sharing thoughts",
            url="https://github.com/orgs/community/discussions/1",
        ),
    ]


# Integration test marker
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires a browser and network)"
    )
