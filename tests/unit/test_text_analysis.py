"""Tests for keyword extraction, similarity and categorization."""

import pytest

from tests.helpers import NamedCategory
from triagedesk.core import UndefinedSimilarityException
from triagedesk.matching import calculate_similarity, categorize_inquiry, extract_keywords
from triagedesk.matching.domain import CategoryKeywordTable, MatchingRules


class TestExtractKeywords:
    def test_strips_punctuation_stop_words_and_short_tokens(self):
        text = "Hello, World! This is a test of the keyword extraction."
        assert extract_keywords(text) == ["hello", "world", "test", "keyword", "extraction"]

    def test_keeps_original_order_and_duplicates(self):
        assert extract_keywords("grade grade exam") == ["grade", "grade", "exam"]

    def test_limits_to_ten_keywords(self):
        words = [f"keyword{i:02d}" for i in range(15)]
        assert extract_keywords(" ".join(words)) == words[:10]

    def test_unicode_letters_are_word_characters(self):
        assert extract_keywords("Café résumé!") == ["café", "résumé"]

    def test_empty_and_short_input(self):
        assert extract_keywords("") == []
        assert extract_keywords("a an the bug fee") == []


class TestCalculateSimilarity:
    def test_jaccard_of_token_sets(self):
        assert calculate_similarity("reset my password", "reset password") == pytest.approx(2 / 3)

    def test_identical_and_disjoint(self):
        assert calculate_similarity("Grade Inquiry", "grade inquiry") == 1.0
        assert calculate_similarity("alpha", "beta") == 0.0

    def test_one_empty_side_is_zero(self):
        assert calculate_similarity("", "something") == 0.0

    def test_both_empty_is_undefined(self):
        with pytest.raises(UndefinedSimilarityException):
            calculate_similarity("   ", "")

    def test_symmetric(self):
        a, b = "my exam grade", "exam schedule"
        assert calculate_similarity(a, b) == calculate_similarity(b, a)


class TestCategorizeInquiry:
    def test_login_password_goes_to_technical(self, default_categories):
        assert categorize_inquiry("I forgot my login password", default_categories) == "cat-tech"

    def test_academic_keywords(self, default_categories):
        assert categorize_inquiry("When is the exam for my course?", default_categories) == "cat-acad"

    def test_administrative_keywords(self, default_categories):
        assert categorize_inquiry("What is the payment deadline?", default_categories) == "cat-admin"

    def test_technical_table_checked_first(self, default_categories):
        assert categorize_inquiry("login to see my grade", default_categories) == "cat-tech"

    def test_falls_back_to_general(self, default_categories):
        assert categorize_inquiry("xyz", default_categories) == "cat-general"

    def test_short_table_keywords_never_fire(self, default_categories):
        # "bug" and "fee" are filtered out by keyword extraction before lookup
        assert categorize_inquiry("there is a bug", default_categories) == "cat-general"
        assert categorize_inquiry("the fee", default_categories) == "cat-general"

    def test_missing_category_does_not_fall_through(self):
        categories = [NamedCategory(id="acad", name="Academic"), NamedCategory(id="gen", name="General")]
        assert categorize_inquiry("password reset please", categories) is None

    def test_no_fallback_category(self):
        categories = [NamedCategory(id="acad", name="Academic")]
        assert categorize_inquiry("xyz", categories) is None

    def test_name_fragment_is_case_insensitive_substring(self):
        categories = [NamedCategory(id="adm", name="Student ADMINISTRATION")]
        assert categorize_inquiry("registration question", categories) == "adm"

    def test_custom_tables(self):
        rules = MatchingRules(category_tables=[
            CategoryKeywordTable(name="billing", name_fragment="Billing", keywords=("Invoice",)),
        ])
        categories = [NamedCategory(id="bill", name="Billing"), NamedCategory(id="gen", name="General")]

        assert categorize_inquiry("where is my invoice", categories, rules) == "bill"
        assert categorize_inquiry("password reset", categories, rules) == "gen"
