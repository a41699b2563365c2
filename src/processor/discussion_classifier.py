"""Keyword-heuristic classification of discussion titles."""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from constants import BUG_REPORT, CLASSIFICATIONS, DISCUSSION, FEATURE_REQUEST, QUESTION
from scrapers.github_discussions import DiscussionRecord

logger = logging.getLogger("discussion_watch")

BUG_KEYWORDS = (
    "bug", "error", "issue", "problem", "broken", "not working", "fail", "crash",
    "exception", "unexpected", "wrong", "incorrect", "unable to", "cannot",
    "doesn't work", "does not work", "regression", "breaking",
    "malfunction", "glitch", "defect", "fault", "anomaly",
)

FEATURE_KEYWORDS = (
    "feature", "request", "enhancement", "improvement", "suggestion",
    "proposal", "idea", "add", "support for", "would be nice", "could we",
    "please add", "new feature", "capability", "functionality",
)

QUESTION_KEYWORDS = (
    "how to", "how do", "question", "help", "clarification", "documentation",
    "tutorial", "guide", "example", "usage", "best practice", "recommend",
)

MAX_CONFIDENCE = 95
DISCUSSION_CONFIDENCE = 30

# Comment counts above this boost bug report confidence
ACTIVE_THREAD_COMMENTS = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class KeywordScores:
    """Per-category keyword match counts for one title."""

    bug: int
    feature: int
    question: int


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a discussion title."""

    classification: str
    confidence: int
    bug_score: int = 0
    feature_score: int = 0
    question_score: int = 0

    def to_dict(self) -> dict:
        return {
            "classification": self.classification,
            "confidence": self.confidence,
            "bugScore": self.bug_score,
            "featureScore": self.feature_score,
            "questionScore": self.question_score,
        }


@dataclass(frozen=True)
class AnalyzedDiscussion:
    """A discussion record with its classification attached."""

    record: DiscussionRecord
    analysis: ClassificationResult

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data.update(self.analysis.to_dict())
        return data


def _bug_confidence(title: str, scores: KeywordScores) -> int:
    confidence = min(scores.bug * 25, 90)
    if "error" in title or "bug" in title:
        confidence += 10
    if "not working" in title or "broken" in title:
        confidence += 15
    return confidence


# Evaluated in order; the first matching rule wins.
CLASSIFICATION_RULES = (
    (BUG_REPORT, lambda s: s.bug > 0, _bug_confidence),
    (FEATURE_REQUEST, lambda s: s.feature > 0, lambda t, s: min(s.feature * 20, 80)),
    (QUESTION, lambda s: s.question > 0, lambda t, s: min(s.question * 15, 70)),
)


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Count how many keywords occur in text (each at most once)."""
    return sum(1 for keyword in keywords if keyword in text)


def score_title(title: str) -> KeywordScores:
    """Score a title against the bug, feature and question keyword sets.

    Args:
        title: Discussion title (any case).

    Returns:
        KeywordScores with a match count per category.
    """
    lowered = (title or "").lower()
    return KeywordScores(
        bug=count_keywords(lowered, BUG_KEYWORDS),
        feature=count_keywords(lowered, FEATURE_KEYWORDS),
        question=count_keywords(lowered, QUESTION_KEYWORDS),
    )


def parse_comment_count(text: Optional[str]) -> int:
    """Parse the leading integer of a comment count, 0 if there is none."""
    if not text:
        return 0
    match = _LEADING_INT.match(str(text))
    if not match:
        return 0
    return int(match.group(1))


def classify_discussion(
    title: str,
    comment_count_text: Optional[str] = None,
    author: Optional[str] = None,
) -> ClassificationResult:
    """Classify a discussion as bug report, feature request, question or discussion.

    The author is accepted for call-site symmetry with DiscussionRecord but
    does not take part in scoring.

    Args:
        title: Discussion title.
        comment_count_text: Comment count as displayed on the listing page.
        author: Discussion author (unused).

    Returns:
        ClassificationResult with confidence in [0, 95].
    """
    lowered = (title or "").lower()
    scores = score_title(lowered)

    classification = DISCUSSION
    confidence = DISCUSSION_CONFIDENCE
    for label, matches, confidence_for in CLASSIFICATION_RULES:
        if matches(scores):
            classification = label
            confidence = confidence_for(lowered, scores)
            break

    if classification == BUG_REPORT and parse_comment_count(comment_count_text) > ACTIVE_THREAD_COMMENTS:
        confidence += 5

    confidence = min(confidence, MAX_CONFIDENCE)

    return ClassificationResult(
        classification=classification,
        confidence=int(round(confidence)),
        bug_score=scores.bug,
        feature_score=scores.feature,
        question_score=scores.question,
    )


def classify_record(record: DiscussionRecord) -> AnalyzedDiscussion:
    """Attach a classification to a single record."""
    analysis = classify_discussion(record.title, record.comment_count, record.author)
    return AnalyzedDiscussion(record=record, analysis=analysis)


def classify_all(records: Iterable[DiscussionRecord]) -> List[AnalyzedDiscussion]:
    """Classify every record, preserving order.

    Args:
        records: Records to classify.

    Returns:
        List of AnalyzedDiscussion objects.
    """
    analyzed = [classify_record(record) for record in records]
    logger.info(f"Classified {len(analyzed)} discussions")
    for item in analyzed:
        logger.debug(
            f"{item.analysis.classification} ({item.analysis.confidence}%): {item.record.title}"
        )
    return analyzed


def group_by_classification(items: Iterable[AnalyzedDiscussion]) -> dict:
    """Group analyzed discussions by label, keeping order within each group."""
    groups = {label: [] for label in CLASSIFICATIONS}
    for item in items:
        groups.setdefault(item.analysis.classification, []).append(item)
    return groups
