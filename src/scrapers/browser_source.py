"""Playwright-backed page source for the discussions listing page."""

import logging
from typing import Any, List, Optional

from constants import DEBUG_PROBE_SELECTORS, DEFAULT_DISCUSSIONS_URL, ITEM_SELECTOR
from scrapers.github_discussions import ListItemHandle

try:
    from playwright.sync_api import sync_playwright, TimeoutError as PlaywrightTimeout
    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    PLAYWRIGHT_AVAILABLE = False
    sync_playwright = None
    PlaywrightTimeout = Exception

logger = logging.getLogger("discussion_watch")


class PlaywrightListItem(ListItemHandle):
    """List item backed by a Playwright ElementHandle."""

    def __init__(self, element, base_url: str = ""):
        super().__init__(base_url)
        self.element = element

    def _select(self, selector: str) -> Optional[Any]:
        return self.element.query_selector(selector)

    def _text(self, element: Any) -> str:
        return element.text_content() or ""

    def _attr(self, element: Any, name: str) -> Optional[str]:
        return element.get_attribute(name)


class BrowserPageSource:
    """Render the discussions listing page in headless Chromium.

    Element handles returned by list_items() stay valid only while the
    source is open, so extract records before leaving the ``with`` block.
    """

    NAVIGATION_TIMEOUT_MS = 30000
    ITEM_WAIT_TIMEOUT_MS = 15000
    DEBUG_SCREENSHOT_PATH = "debug-screenshot.png"

    def __init__(self, url: str = DEFAULT_DISCUSSIONS_URL, headless: bool = True):
        """Initialize the source with a Playwright browser.

        Args:
            url: Listing page to render.
            headless: Run browser in headless mode (default: True).
        """
        self.url = url
        self.headless = headless
        self.playwright = None
        self.browser = None
        self.page = None

        if not PLAYWRIGHT_AVAILABLE:
            logger.warning(
                "Playwright is not installed. Browser scraping will be disabled. "
                "Install with: pip install playwright && playwright install chromium"
            )
            return

        try:
            self.playwright = sync_playwright().start()
            self.browser = self.playwright.chromium.launch(headless=headless)
            self.page = self.browser.new_page()
            logger.info("Playwright browser initialized successfully")
        except Exception as e:
            logger.warning(f"Failed to initialize Playwright browser: {e}")
            self.close()

    def list_items(self) -> List[PlaywrightListItem]:
        """Navigate to the listing page and return its discussion list items.

        Returns:
            List of item handles, empty if the page or items failed to load.
        """
        if not self.page:
            logger.warning("Browser not available, returning empty item list")
            return []

        try:
            logger.info(f"Navigating to {self.url}")
            self.page.goto(self.url, wait_until="networkidle", timeout=self.NAVIGATION_TIMEOUT_MS)

            logger.info("Waiting for discussions to load...")
            self.page.wait_for_selector(ITEM_SELECTOR, timeout=self.ITEM_WAIT_TIMEOUT_MS)

            elements = self.page.query_selector_all(ITEM_SELECTOR)
            base_url = self.page.url or self.url
            logger.info(f"Found {len(elements)} discussion list items")
            return [PlaywrightListItem(element, base_url) for element in elements]

        except PlaywrightTimeout:
            logger.error(f"Timeout loading discussions from {self.url}")
            self.capture_debug_info()
            return []
        except Exception as e:
            logger.error(f"Error loading discussions: {e}")
            self.capture_debug_info()
            return []

    def probe_selectors(self) -> dict:
        """Count matches for broader selectors and sample discussion links.

        Returns:
            Dict of selector-name -> count, plus ``sample_links`` (up to 5
            dicts with href and text).
        """
        report = {name: 0 for name in DEBUG_PROBE_SELECTORS}
        report["sample_links"] = []

        if not self.page:
            return report

        for name, selector in DEBUG_PROBE_SELECTORS.items():
            try:
                report[name] = len(self.page.query_selector_all(selector))
            except Exception as e:
                logger.debug(f"Probe for '{selector}' failed: {e}")

        try:
            links = self.page.query_selector_all(DEBUG_PROBE_SELECTORS["discussion_links"])
            for link in links[:5]:
                report["sample_links"].append({
                    "href": link.evaluate("el => el.href"),
                    "text": (link.text_content() or "").strip()[:100],
                })
        except Exception as e:
            logger.debug(f"Could not sample discussion links: {e}")

        return report

    def capture_debug_info(self) -> None:
        """Save a screenshot and log page title, URL and list item count."""
        if not self.page:
            return

        try:
            self.page.screenshot(path=self.DEBUG_SCREENSHOT_PATH)
            logger.info(f"Saved debug screenshot to {self.DEBUG_SCREENSHOT_PATH}")
            logger.info(f"Page title: {self.page.title()}")
            logger.info(f"Current URL: {self.page.url}")
            li_count = len(self.page.query_selector_all("li"))
            logger.info(f"Found {li_count} li elements total")
        except Exception as e:
            logger.error(f"Error during debugging: {e}")

    def close(self):
        """Clean up browser and Playwright resources.

        Safe to call multiple times.
        """
        if self.page:
            try:
                self.page.close()
            except Exception as e:
                logger.debug(f"Error closing page: {e}")
            self.page = None

        if self.browser:
            try:
                self.browser.close()
            except Exception as e:
                logger.debug(f"Error closing browser: {e}")
            self.browser = None

        if self.playwright:
            try:
                self.playwright.stop()
            except Exception as e:
                logger.debug(f"Error stopping Playwright: {e}")
            self.playwright = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
