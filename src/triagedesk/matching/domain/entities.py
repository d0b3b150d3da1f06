"""
Matching Domain Entities
========================

Result objects produced by the matching engine and the minimal shapes
it reads from templates and categories.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence


class MatchableTemplate(Protocol):
    """Fields the matcher reads from a response template."""
    title: str
    content: str
    keywords: Sequence[str]
    is_active: bool


class NamedCategory(Protocol):
    """Fields the categorizer reads from a category."""
    id: Optional[str]
    name: str


@dataclass(frozen=True)
class TemplateScore:
    """Raw score of one template against one message."""
    score: int
    matched_keywords: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MatchResult:
    """
    Winning template for an inquiry.

    confidence is always within [0, 1] and at least the rule set's
    minimum confidence.
    """
    template: Any
    confidence: float
    matched_keywords: List[str]
    score: int

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")
