"""Tests for the discussion classifier."""

import pytest


class TestScoreTitle:
    """Tests for keyword scoring."""

    def test_counts_each_keyword_once(self):
        """Test repeated keywords contribute at most one point."""
        from processor.discussion_classifier import score_title

        assert score_title("crash crash crash").bug == 1

    def test_counts_distinct_keywords_independently(self):
        """Test every matching keyword in a set is counted."""
        from processor.discussion_classifier import score_title

        scores = score_title("Error: broken and not working")
        assert scores.bug == 3

    def test_case_insensitive(self):
        from processor.discussion_classifier import score_title

        assert score_title("APP CRASHES").bug == 1

    def test_substring_matching(self):
        """Test keywords match inside longer words."""
        from processor.discussion_classifier import score_title

        assert score_title("Debug logging").bug == 1

    def test_empty_title(self):
        from processor.discussion_classifier import score_title

        scores = score_title("")
        assert (scores.bug, scores.feature, scores.question) == (0, 0, 0)

    def test_keyword_sets_have_no_duplicates(self):
        from processor.discussion_classifier import BUG_KEYWORDS, FEATURE_KEYWORDS, QUESTION_KEYWORDS

        for keywords in (BUG_KEYWORDS, FEATURE_KEYWORDS, QUESTION_KEYWORDS):
            assert len(keywords) == len(set(keywords))


class TestParseCommentCount:
    """Tests for parse_comment_count."""

    @pytest.mark.parametrize("text,expected", [
        ("0", 0),
        ("12", 12),
        ("  7 ", 7),
        ("6 comments", 6),
        ("1,234", 1),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("-3", -3),
    ])
    def test_parse(self, text, expected):
        from processor.discussion_classifier import parse_comment_count

        assert parse_comment_count(text) == expected


class TestClassifyDiscussion:
    """Tests for classify_discussion."""

    def test_bug_report(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("App crashes on startup", "3")

        assert result.classification == "bug_report"
        assert result.bug_score == 1
        assert result.confidence == 25

    def test_feature_request(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("Feature request: add dark mode", "0")

        assert result.classification == "feature_request"
        # feature, request, add
        assert result.feature_score == 3
        assert result.confidence == min(result.feature_score * 20, 80) == 60

    def test_question(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("How to configure X?", "1")

        assert result.classification == "question"
        assert result.question_score == 1
        assert result.confidence == 15

    def test_discussion_fallback(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("Just sharing thoughts", "0")

        assert result.classification == "discussion"
        assert result.confidence == 30
        assert (result.bug_score, result.feature_score, result.question_score) == (0, 0, 0)

    def test_bug_bonuses_stack_and_clamp(self):
        """Test error/broken bonuses and comment boost are capped at 95."""
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("Error: broken and not working", "10")

        assert result.classification == "bug_report"
        assert result.bug_score >= 3
        assert result.confidence == 95

    def test_error_bonus(self):
        from processor.discussion_classifier import classify_discussion

        # 'bug' keyword, +10 for containing "bug"
        assert classify_discussion("Found a bug").confidence == 35

    def test_broken_bonus(self):
        from processor.discussion_classifier import classify_discussion

        # 'broken' keyword, +15 for containing "broken"
        assert classify_discussion("Login is broken", "0").confidence == 40

    def test_base_confidence_capped_at_90(self):
        from processor.discussion_classifier import classify_discussion

        # issue, problem, fail, crash, exception, unexpected -> 6 * 25 capped at 90
        result = classify_discussion("Issue: problem with fail, crash and unexpected exception")
        assert result.bug_score == 6
        assert result.confidence == 90

    def test_comment_boost_for_bug_reports(self):
        from processor.discussion_classifier import classify_discussion

        assert classify_discussion("Login is broken", "12").confidence == 45

    def test_comment_boost_requires_more_than_five(self):
        from processor.discussion_classifier import classify_discussion

        assert classify_discussion("Login is broken", "5").confidence == 40

    def test_non_numeric_comment_count(self):
        from processor.discussion_classifier import classify_discussion

        assert classify_discussion("Login is broken", "lots").confidence == 40

    def test_no_comment_boost_for_other_labels(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("Feature idea", "100")

        assert result.classification == "feature_request"
        assert result.confidence == 40

    def test_feature_confidence_capped(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("New feature request: please add support for enhancement idea")

        assert result.classification == "feature_request"
        assert result.confidence == 80

    def test_question_confidence_capped(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion(
            "How to use the guide: question about usage, tutorial example, help with documentation"
        )

        assert result.classification == "question"
        assert result.confidence == 70

    def test_bug_takes_priority_over_feature(self):
        """Test a title matching bug and feature keywords is a bug report."""
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("Bug: please add retry")

        assert result.classification == "bug_report"
        assert result.feature_score > 0

    def test_feature_takes_priority_over_question(self):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion("How to request a new feature")

        assert result.classification == "feature_request"
        assert result.question_score > 0

    def test_author_does_not_affect_result(self):
        from processor.discussion_classifier import classify_discussion

        first = classify_discussion("App crashes on startup", "3", author="alice")
        second = classify_discussion("App crashes on startup", "3", author="bug-hunter")

        assert first == second

    def test_deterministic(self):
        from processor.discussion_classifier import classify_discussion

        assert classify_discussion("Help needed", "2") == classify_discussion("Help needed", "2")

    @pytest.mark.parametrize("title,comments", [
        ("", ""),
        ("bug error broken not working crash regression glitch", "999"),
        ("feature", "-1"),
        ("how to", None),
        ("Random words only", "3 comments"),
    ])
    def test_confidence_always_int_in_range(self, title, comments):
        from processor.discussion_classifier import classify_discussion

        result = classify_discussion(title, comments)

        assert isinstance(result.confidence, int)
        assert 0 <= result.confidence <= 95

    def test_to_dict_keys(self):
        from processor.discussion_classifier import classify_discussion

        data = classify_discussion("App crashes on startup", "3").to_dict()

        assert data == {
            "classification": "bug_report",
            "confidence": 25,
            "bugScore": 1,
            "featureScore": 0,
            "questionScore": 0,
        }


class TestClassifyAll:
    """Tests for batch classification helpers."""

    def test_classify_all_preserves_order(self, sample_records):
        from processor.discussion_classifier import classify_all

        analyzed = classify_all(sample_records)

        assert [a.record for a in analyzed] == sample_records
        assert [a.analysis.classification for a in analyzed] == [
            "bug_report", "feature_request", "discussion"
        ]

    def test_classify_all_empty(self):
        from processor.discussion_classifier import classify_all

        assert classify_all([]) == []

    def test_analyzed_to_dict_is_flat(self, sample_records):
        from processor.discussion_classifier import classify_record

        data = classify_record(sample_records[0]).to_dict()

        assert data["title"] == "Error: broken and not working"
        assert data["commentCount"] == "10"
        assert data["classification"] == "bug_report"
        assert data["confidence"] == 95
        assert set(data) == {
            "title", "url", "author", "datetime", "timeText", "commentCount",
            "classification", "confidence", "bugScore", "featureScore", "questionScore",
        }

    def test_group_by_classification(self, sample_records):
        from processor.discussion_classifier import classify_all, group_by_classification

        groups = group_by_classification(classify_all(sample_records))

        assert list(groups) == ["bug_report", "feature_request", "question", "discussion"]
        assert len(groups["bug_report"]) == 1
        assert groups["question"] == []
