"""
Template Matcher
================

Scores response templates against an inquiry message and picks the best one.

Scoring (case-insensitive substring containment against the message):
- each distinct template keyword found (any case) +keyword_weight (3)
- each distinct title word longer than 3 chars  +title_weight   (2)
- each distinct content word longer than 4 chars +content_weight (1)

confidence = min(score / max(word_count(message), 1), 1.0)

A template becomes the running best only when its score is strictly higher
than the best so far and its confidence reaches min_confidence, so ties keep
the template listed first. Larger keyword lists score higher; scores are not
normalized for template size.
"""

from typing import Iterable, List, Optional

from triagedesk.matching.domain.entities import MatchableTemplate, MatchResult, TemplateScore
from triagedesk.matching.domain.value_objects import DEFAULT_RULES, MatchingRules


def _distinct(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _distinct_keywords(keywords: Iterable[str]) -> List[str]:
    """First spelling of each keyword, compared case-insensitively."""
    unique = {}
    for keyword in keywords:
        unique.setdefault(keyword.lower(), keyword)
    return list(unique.values())


def word_count(text: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(text.split())


def score_template(
    lowercase_message: str,
    template: MatchableTemplate,
    rules: MatchingRules = DEFAULT_RULES
) -> TemplateScore:
    """
    Score a single template against an already lowercased message.

    Does not look at is_active; callers filter.
    """
    score = 0
    matched_keywords: List[str] = []

    for keyword in _distinct_keywords(template.keywords or ()):
        if keyword.lower() in lowercase_message:
            score += rules.keyword_weight
            matched_keywords.append(keyword)

    for word in _distinct(template.title.lower().split()):
        if len(word) > rules.min_title_word_length and word in lowercase_message:
            score += rules.title_weight

    for word in _distinct(template.content.lower().split()):
        if len(word) > rules.min_content_word_length and word in lowercase_message:
            score += rules.content_weight

    return TemplateScore(score=score, matched_keywords=matched_keywords)


def calculate_confidence(score: int, lowercase_message: str) -> float:
    """Score per message word, capped at 1.0."""
    return min(score / max(word_count(lowercase_message), 1), 1.0)


def find_best_match(
    message: str,
    templates: Iterable[MatchableTemplate],
    rules: MatchingRules = DEFAULT_RULES
) -> Optional[MatchResult]:
    """
    Pick the best active template for a message.

    Args:
        message: Inquiry text (callers trim it)
        templates: Candidates in their natural listing order; inactive ones are skipped
        rules: Weights and thresholds

    Returns:
        MatchResult for the winner, or None when no template clears min_confidence
    """
    lowercase_message = message.lower()
    best_match: Optional[MatchResult] = None
    highest_score = 0

    for template in templates:
        if not template.is_active:
            continue

        scored = score_template(lowercase_message, template, rules)
        confidence = calculate_confidence(scored.score, lowercase_message)

        if scored.score > highest_score and confidence >= rules.min_confidence:
            highest_score = scored.score
            best_match = MatchResult(
                template=template,
                confidence=confidence,
                matched_keywords=scored.matched_keywords,
                score=scored.score,
            )

    return best_match
