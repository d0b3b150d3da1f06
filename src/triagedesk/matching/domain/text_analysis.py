"""
Text Analysis
=============

Keyword extraction, Jaccard similarity and keyword-table categorization.

All functions are pure and deterministic.
"""

import re
from typing import Iterable, List, Optional

from triagedesk.core import UndefinedSimilarityException
from triagedesk.matching.domain.entities import NamedCategory
from triagedesk.matching.domain.value_objects import DEFAULT_RULES, MatchingRules

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def extract_keywords(text: str, rules: MatchingRules = DEFAULT_RULES) -> List[str]:
    """
    Extract up to max_keywords keywords from free text.

    Lowercases, strips punctuation, splits on whitespace and keeps tokens
    longer than min_keyword_length that are not stop words, in original order.
    """
    cleaned = _NON_WORD.sub("", text.lower())
    keywords = [
        token for token in _WHITESPACE.split(cleaned)
        if len(token) > rules.min_keyword_length and token not in rules.stop_words
    ]
    return keywords[:rules.max_keywords]


def calculate_similarity(text_a: str, text_b: str) -> float:
    """
    Jaccard similarity of the lowercase whitespace-token sets.

    Raises:
        UndefinedSimilarityException: both texts have no tokens
    """
    tokens_a = set(text_a.lower().split())
    tokens_b = set(text_b.lower().split())

    union = tokens_a | tokens_b
    if not union:
        raise UndefinedSimilarityException()

    return len(tokens_a & tokens_b) / len(union)


def _find_category_id(categories: Iterable[NamedCategory], fragment: str) -> Optional[str]:
    for category in categories:
        if fragment in category.name.lower():
            return category.id
    return None


def categorize_inquiry(
    message: str,
    categories: Iterable[NamedCategory],
    rules: MatchingRules = DEFAULT_RULES
) -> Optional[str]:
    """
    Map a message to a category id using the keyword tables.

    Tables are checked in order and the first one sharing a keyword with the
    message decides; if no category name contains that table's fragment the
    result is None. With no table hit, the fallback ("general") category is
    used when present.
    """
    categories = list(categories)
    keywords = set(extract_keywords(message, rules))

    for table in rules.category_tables:
        if keywords.intersection(table.keywords):
            return _find_category_id(categories, table.name_fragment)

    return _find_category_id(categories, rules.fallback_category_fragment)
