"""Tests for the keyword-weighted template matcher."""

import pytest

from tests.helpers import PORTAL_QUESTION, Template
from triagedesk.matching import MatchingRules, find_best_match
from triagedesk.matching.domain import MatchResult, score_template, word_count


@pytest.fixture
def portal_template():
    return Template(
        id="portal",
        title="Assignment Portal Access",
        content="Go to the student dashboard and open the assignment portal.",
        keywords=["assignment", "portal", "access", "login", "dashboard", "help", "how", "submit"],
    )


@pytest.fixture
def grade_template():
    return Template(
        id="grade",
        title="Grade Inquiry Response",
        content="To check your current grades log into the student portal.",
        keywords=["grade", "grades", "score", "marks", "assessment"],
    )


class TestScoring:
    def test_keyword_title_and_content_weights(self):
        template = Template(title="Refund Policy", content="refunds processed weekly", keywords=["refund"])
        # keyword "refund" +3, title "refund" +2, "policy" +2, content "refunds" +1
        scored = score_template("refunds policy question", template)
        assert scored.score == 8
        assert scored.matched_keywords == ["refund"]

    def test_short_title_and_content_words_are_ignored(self):
        template = Template(title="How to", content="the help desk", keywords=[])
        # "how" is 3 chars (title needs > 3); "help" is 4 chars (content needs > 4)
        assert score_template("how to get help", template).score == 0

    def test_duplicate_keywords_count_once(self):
        template = Template(title="x", content="y", keywords=["grade", "grade", "grade"])
        scored = score_template("my grade", template)
        assert scored.score == 3
        assert scored.matched_keywords == ["grade"]

    def test_keywords_differing_only_in_case_count_once(self):
        template = Template(title="x", content="y", keywords=["Grade", "grade", "GRADE"])
        scored = score_template("my grade", template)
        assert scored.score == 3
        assert scored.matched_keywords == ["Grade"]

    def test_keyword_containment_is_substring_and_case_insensitive(self):
        template = Template(title="x", content="y", keywords=["LOG"])
        scored = score_template("cannot login today", template)
        assert scored.score == 3
        assert scored.matched_keywords == ["LOG"]

    def test_word_count_splits_on_any_whitespace(self):
        assert word_count("one\ttwo\n three   four") == 4
        assert word_count("") == 0


class TestFindBestMatch:
    def test_portal_question_matches_portal_template(self, portal_template, grade_template):
        result = find_best_match(PORTAL_QUESTION, [grade_template, portal_template])

        assert isinstance(result, MatchResult)
        assert result.template is portal_template
        assert result.confidence == 1.0
        assert result.matched_keywords == ["assignment", "portal", "access", "how"]

    def test_no_match_returns_none(self, portal_template, grade_template):
        assert find_best_match("xyz", [portal_template, grade_template]) is None

    def test_empty_inputs(self, portal_template):
        assert find_best_match("anything at all", []) is None
        assert find_best_match("", [portal_template]) is None

    def test_inactive_templates_are_skipped(self, portal_template):
        portal_template.is_active = False
        assert find_best_match(PORTAL_QUESTION, [portal_template]) is None

    def test_confidence_threshold_is_inclusive(self):
        template = Template(title="zzz", content="zz", keywords=["refund"])

        ten_words = "please can somebody tell me about the refund policy today"
        eleven_words = "please can somebody tell me about the refund policy for tomorrow"

        result = find_best_match(ten_words, [template])
        assert result is not None
        assert result.confidence == pytest.approx(0.3)

        assert find_best_match(eleven_words, [template]) is None

    def test_confidence_is_capped_at_one(self, portal_template):
        result = find_best_match("portal access", [portal_template])
        assert result.score > word_count("portal access")
        assert result.confidence == 1.0

    def test_tie_keeps_first_template(self):
        first = Template(id="first", title="x", content="y", keywords=["exam"])
        second = Template(id="second", title="x", content="y", keywords=["exam"])

        result = find_best_match("exam date", [first, second])
        assert result.template.id == "first"

        result = find_best_match("exam date", [second, first])
        assert result.template.id == "second"

    def test_higher_score_wins_regardless_of_order(self, portal_template, grade_template):
        result = find_best_match("my grades and assessment marks", [portal_template, grade_template])
        assert result.template is grade_template

    def test_threshold_applies_to_every_candidate(self):
        wordy = Template(id="wordy", title="x", content="y", keywords=["alpha", "beta"])
        precise = Template(id="precise", title="x", content="y", keywords=["alpha"])
        message = "alpha beta " + " ".join(["filler"] * 20)

        assert find_best_match(message, [wordy, precise]) is None

        short = "alpha beta"
        assert find_best_match(short, [wordy, precise]).template.id == "wordy"

    def test_larger_keyword_lists_are_favored(self):
        # Scores are not normalized by template size
        narrow = Template(id="narrow", title="x", content="y", keywords=["exam"])
        broad = Template(id="broad", title="x", content="y", keywords=["exam", "ex", "am"])

        assert find_best_match("exam", [narrow, broad]).template.id == "broad"

    def test_matcher_does_not_mutate_templates(self, portal_template):
        keywords_before = list(portal_template.keywords)
        find_best_match(PORTAL_QUESTION, [portal_template])
        assert portal_template.keywords == keywords_before
        assert portal_template.is_active is True

    def test_custom_rules(self, grade_template):
        strict = MatchingRules(min_confidence=0.95)
        message = "question about my grade for the last course"
        assert find_best_match(message, [grade_template]) is not None
        assert find_best_match(message, [grade_template], strict) is None


class TestMatchResult:
    def test_confidence_must_be_within_bounds(self):
        with pytest.raises(ValueError):
            MatchResult(template=None, confidence=1.5, matched_keywords=[], score=1)
