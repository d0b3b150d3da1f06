"""
Matching Application Services
=============================

Binds the pure matching engine to the currently active rule set and
adds logging around each decision.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from triagedesk.matching.domain import (
    DEFAULT_RULES,
    MatchableTemplate,
    MatchingRules,
    MatchResult,
    NamedCategory,
    calculate_similarity,
    categorize_inquiry,
    extract_keywords,
    find_best_match,
)
from triagedesk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


# ========== Provider Interface ==========

class IMatchingRulesProvider(ABC):
    """Interface for matching rules access."""

    @abstractmethod
    def get_rules(self) -> MatchingRules:
        """Get current matching rules."""


class StaticRulesProvider(IMatchingRulesProvider):
    """Provider returning a fixed rule set."""

    def __init__(self, rules: MatchingRules = DEFAULT_RULES):
        self._rules = rules

    def get_rules(self) -> MatchingRules:
        return self._rules


# ========== Application Service ==========

class MatchingService:
    """
    Service facade over the matching engine.

    Reads the rule set once per call so a hot reload never mixes two
    rule sets inside one decision.
    """

    def __init__(self, rules_provider: Optional[IMatchingRulesProvider] = None):
        self._rules_provider = rules_provider or StaticRulesProvider()

    @property
    def rules(self) -> MatchingRules:
        return self._rules_provider.get_rules()

    def match(
        self,
        message: str,
        templates: Sequence[MatchableTemplate]
    ) -> Optional[MatchResult]:
        """Find the best active template for a message."""
        with log_latency(logger, "template_matching", templates=len(templates)):
            result = find_best_match(message, templates, self.rules)

        if result is None:
            logger.debug("No template cleared the confidence threshold")
        else:
            logger.debug(
                "Template matched",
                extra={
                    "score": result.score,
                    "confidence": round(result.confidence, 3),
                    "matched_keywords": result.matched_keywords
                }
            )
        return result

    def extract_keywords(self, text: str) -> List[str]:
        return extract_keywords(text, self.rules)

    def categorize(self, message: str, categories: Iterable[NamedCategory]) -> Optional[str]:
        return categorize_inquiry(message, categories, self.rules)

    def similarity(self, text_a: str, text_b: str) -> float:
        return calculate_similarity(text_a, text_b)
