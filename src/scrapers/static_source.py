"""Static HTML page source: a saved page or a plain HTTP fetch, parsed with BeautifulSoup."""

import logging
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from constants import DEBUG_PROBE_SELECTORS, DEFAULT_DISCUSSIONS_URL, ITEM_SELECTOR
from scrapers.github_discussions import ListItemHandle

logger = logging.getLogger("discussion_watch")


class SoupListItem(ListItemHandle):
    """List item backed by a BeautifulSoup tag."""

    def __init__(self, tag, base_url: str = ""):
        super().__init__(base_url)
        self.tag = tag

    def _select(self, selector: str) -> Optional[Any]:
        return self.tag.select_one(selector)

    def _text(self, element: Any) -> str:
        return element.get_text()

    def _attr(self, element: Any, name: str) -> Optional[str]:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value


class StaticPageSource:
    """Page source over already-rendered HTML.

    The GitHub discussions listing is server-rendered, so a plain GET returns
    the same list items a browser would. Use from_file() for saved pages.
    """

    def __init__(
        self,
        url: str = DEFAULT_DISCUSSIONS_URL,
        html: Optional[str] = None,
        timeout: int = 30,
    ):
        """Initialize the static source.

        Args:
            url: Page URL; fetched when html is not given, and used to
                resolve relative links.
            html: Pre-rendered HTML (skips the HTTP fetch).
            timeout: Request timeout in seconds.
        """
        self.url = url
        self.timeout = timeout
        self.html = html
        self._soup = None
        self._fetched = html is not None
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "discussion-watch/1.0",
            "Accept": "text/html",
        })

    @classmethod
    def from_file(cls, path: str, url: str = DEFAULT_DISCUSSIONS_URL) -> "StaticPageSource":
        """Create a source from an HTML file on disk."""
        html = Path(path).read_text(encoding="utf-8")
        return cls(url=url, html=html)

    def _fetch(self) -> Optional[str]:
        try:
            logger.info(f"Fetching {self.url}")
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.error(f"Failed to fetch discussions page: {e}")
            return None

    @property
    def soup(self) -> Optional[BeautifulSoup]:
        if self._soup is None:
            if not self._fetched:
                self.html = self._fetch()
                self._fetched = True
            if self.html is None:
                return None
            self._soup = BeautifulSoup(self.html, "html.parser")
        return self._soup

    def list_items(self) -> List[SoupListItem]:
        """Return the discussion list items of the page.

        Returns:
            List of item handles, empty if the page could not be loaded.
        """
        soup = self.soup
        if soup is None:
            return []

        tags = soup.select(ITEM_SELECTOR)
        logger.info(f"Found {len(tags)} discussion list items")
        return [SoupListItem(tag, self.url) for tag in tags]

    def probe_selectors(self) -> dict:
        """Count matches for broader selectors and sample discussion links."""
        report = {name: 0 for name in DEBUG_PROBE_SELECTORS}
        report["sample_links"] = []

        soup = self.soup
        if soup is None:
            return report

        for name, selector in DEBUG_PROBE_SELECTORS.items():
            report[name] = len(soup.select(selector))

        for link in soup.select(DEBUG_PROBE_SELECTORS["discussion_links"])[:5]:
            report["sample_links"].append({
                "href": urljoin(self.url, link.get("href", "")),
                "text": link.get_text().strip()[:100],
            })

        return report

    def capture_debug_info(self) -> None:
        """Log the page title and list item count."""
        soup = self.soup
        if soup is None:
            return
        title = soup.title.get_text().strip() if soup.title else ""
        logger.info(f"Page title: {title}")
        logger.info(f"Current URL: {self.url}")
        logger.info(f"Found {len(soup.find_all('li'))} li elements total")

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
