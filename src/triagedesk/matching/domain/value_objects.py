"""
Matching Value Objects
======================

Immutable rule set consumed by the matching engine.

Effective rules = vocabulary defaults, optionally overridden from YAML.
"""

from typing import FrozenSet, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from triagedesk.matching.domain import vocabulary


class CategoryKeywordTable(BaseModel):
    """Keyword list that routes a message to a category."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Table name (e.g. technical)")
    name_fragment: str = Field(
        ...,
        min_length=1,
        description="Case-insensitive fragment looked up in category names"
    )
    keywords: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("name_fragment")
    @classmethod
    def lowercase_fragment(cls, v: str) -> str:
        return v.lower()

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(k.lower() for k in v)


def _default_tables() -> List[CategoryKeywordTable]:
    return [
        CategoryKeywordTable(name=name, name_fragment=fragment, keywords=keywords)
        for name, fragment, keywords in vocabulary.CATEGORY_KEYWORD_TABLES
    ]


class MatchingRules(BaseModel):
    """
    Weights, thresholds and keyword tables for template matching.

    This is a value object - immutable and defined by its attributes.
    The defaults reproduce the canonical scoring exactly.
    """
    model_config = ConfigDict(frozen=True)

    keyword_weight: int = Field(default=vocabulary.KEYWORD_WEIGHT, ge=0)
    title_weight: int = Field(default=vocabulary.TITLE_WEIGHT, ge=0)
    content_weight: int = Field(default=vocabulary.CONTENT_WEIGHT, ge=0)

    min_title_word_length: int = Field(default=vocabulary.MIN_TITLE_WORD_LENGTH, ge=0)
    min_content_word_length: int = Field(default=vocabulary.MIN_CONTENT_WORD_LENGTH, ge=0)
    min_keyword_length: int = Field(default=vocabulary.MIN_KEYWORD_LENGTH, ge=0)

    min_confidence: float = Field(default=vocabulary.MIN_CONFIDENCE, ge=0.0, le=1.0)
    max_keywords: int = Field(default=vocabulary.MAX_EXTRACTED_KEYWORDS, ge=1)

    stop_words: FrozenSet[str] = Field(default=vocabulary.STOP_WORDS)
    category_tables: List[CategoryKeywordTable] = Field(default_factory=_default_tables)
    fallback_category_fragment: str = Field(default=vocabulary.FALLBACK_CATEGORY_FRAGMENT)

    @field_validator("stop_words")
    @classmethod
    def lowercase_stop_words(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        return frozenset(w.lower() for w in v)

    @field_validator("fallback_category_fragment")
    @classmethod
    def lowercase_fallback(cls, v: str) -> str:
        return v.lower()


DEFAULT_RULES = MatchingRules()
