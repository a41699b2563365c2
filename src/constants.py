"""Canonical constants for discussion-watch."""

DEFAULT_DISCUSSIONS_URL = "https://github.com/orgs/community/discussions/categories/models"

# Listing page selectors
ITEM_SELECTOR = "li.Box-row.js-navigation-item"
TITLE_SELECTOR = "a.markdown-title.discussion-Link--secondary"
AUTHOR_SELECTOR = 'a.Link--muted.Link--inTextBlock[href^="/"][aria-label*="author"]'
TIME_SELECTOR = "relative-time"
COMMENT_SELECTOR = 'a[aria-label*="comment"]'

# Broader selectors probed when the item selector yields nothing
DEBUG_PROBE_SELECTORS = {
    "box_rows": "li.Box-row",
    "title_links": "a.markdown-title",
    "discussion_links": 'a[href*="/discussions/"]',
}

DEFAULT_AUTHOR = "Unknown"
DEFAULT_COMMENT_COUNT = "0"

BUG_REPORT = "bug_report"
FEATURE_REQUEST = "feature_request"
QUESTION = "question"
DISCUSSION = "discussion"

CLASSIFICATIONS = (BUG_REPORT, FEATURE_REQUEST, QUESTION, DISCUSSION)

CLASSIFICATION_EMOJIS = {
    BUG_REPORT: "\U0001F41B",       # Bug
    FEATURE_REQUEST: "✨",      # Sparkles
    QUESTION: "❓",             # Question mark
    DISCUSSION: "\U0001F4AC",       # Speech bubble
}

CLASSIFICATION_LABELS = {
    BUG_REPORT: "Bug Reports",
    FEATURE_REQUEST: "Feature Requests",
    QUESTION: "Questions",
    DISCUSSION: "Other Discussions",
}
