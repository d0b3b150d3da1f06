"""
Matching Domain Layer
=====================

Pure inquiry-to-template matching engine.

Contains:
- Matcher: weighted keyword / title / content scoring
- Text analysis: keyword extraction, similarity, categorization
- Value objects: MatchingRules
- Vocabulary: constant weight, stop-word and keyword tables

This layer is framework-agnostic and never mutates its inputs.
"""

from triagedesk.matching.domain.entities import (
    MatchableTemplate,
    NamedCategory,
    MatchResult,
    TemplateScore,
)
from triagedesk.matching.domain.value_objects import (
    CategoryKeywordTable,
    MatchingRules,
    DEFAULT_RULES,
)
from triagedesk.matching.domain.matcher import (
    find_best_match,
    score_template,
    calculate_confidence,
    word_count,
)
from triagedesk.matching.domain.text_analysis import (
    extract_keywords,
    calculate_similarity,
    categorize_inquiry,
)

__all__ = [
    # Entities
    "MatchableTemplate",
    "NamedCategory",
    "MatchResult",
    "TemplateScore",
    # Value Objects
    "CategoryKeywordTable",
    "MatchingRules",
    "DEFAULT_RULES",
    # Engine
    "find_best_match",
    "score_template",
    "calculate_confidence",
    "word_count",
    "extract_keywords",
    "calculate_similarity",
    "categorize_inquiry",
]
