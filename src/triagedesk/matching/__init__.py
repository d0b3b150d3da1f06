"""
Matching Module
===============

Bounded Context for inquiry-to-template matching.

Responsibilities:
- Score active response templates against an inquiry message
- Extract keywords from free text
- Compare texts with Jaccard similarity
- Route a message to a category with fixed keyword tables

The four engine operations are pure functions re-exported here.
"""

from triagedesk.matching.domain import (
    MatchResult,
    MatchingRules,
    find_best_match,
    extract_keywords,
    calculate_similarity,
    categorize_inquiry,
)

__version__ = "1.0.0"

__all__ = [
    "MatchResult",
    "MatchingRules",
    "find_best_match",
    "extract_keywords",
    "calculate_similarity",
    "categorize_inquiry",
]
