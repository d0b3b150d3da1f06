"""
Helpdesk Application DTOs
=========================

Data Transfer Objects for the Helpdesk API layer.

Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from triagedesk.config import DEFAULT_CATEGORY_COLOR


# ========== Type Aliases for Literals ==========
InquiryStatusStr = Literal["pending", "responded", "escalated"]

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _normalize_keywords(keywords: List[str]) -> List[str]:
    """Strip, drop blanks and case-insensitive duplicates, keep order."""
    unique = {}
    for keyword in keywords:
        cleaned = keyword.strip() if keyword else ""
        if cleaned:
            unique.setdefault(cleaned.lower(), cleaned)
    return list(unique.values())


def _reject_null(value):
    """Partial updates may omit a field but not clear a required one."""
    if value is None:
        raise ValueError("must not be null")
    return value


# ========== Category DTOs ==========

class CategoryCreateRequest(BaseModel):
    """Request model for creating a category."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, pattern=HEX_COLOR_PATTERN)
    description: Optional[str] = Field(None, max_length=500)


class CategoryUpdateRequest(BaseModel):
    """Partial update for a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name", "color")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        return _reject_null(v)


class CategoryResponse(BaseModel):
    """Category as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: str
    description: Optional[str] = None
    created_at: datetime


# ========== Response Template DTOs ==========

class TemplateCreateRequest(BaseModel):
    """Request model for creating a response template."""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    category_id: Optional[str] = None
    keywords: List[str] = Field(default_factory=list, description="Trigger keywords")
    is_active: bool = True

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: List[str]) -> List[str]:
        return _normalize_keywords(v)


class TemplateUpdateRequest(BaseModel):
    """Partial update for a response template."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=5000)
    category_id: Optional[str] = None
    keywords: Optional[List[str]] = None
    is_active: Optional[bool] = None
    success_rate: Optional[float] = Field(None, ge=0.0, le=1.0)

    @field_validator("title", "content", "is_active", "success_rate")
    @classmethod
    def reject_null(cls, v):
        return _reject_null(v)

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: Optional[List[str]]) -> List[str]:
        return _normalize_keywords(_reject_null(v))


class TemplateResponse(BaseModel):
    """Response template as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    category_id: Optional[str] = None
    keywords: List[str]
    is_active: bool
    usage_count: int
    success_rate: float
    created_at: datetime
    updated_at: datetime


# ========== Inquiry DTOs ==========

class InquiryCreateRequest(BaseModel):
    """Request model for submitting an inquiry."""
    message: str = Field(..., min_length=1, max_length=5000, description="Inquiry text")
    sender_name: str = Field(..., min_length=1, max_length=200)
    sender_email: Optional[str] = Field(None, max_length=320)
    category_id: Optional[str] = Field(None, description="Explicit category; skips auto-categorization")

    @field_validator("message", "sender_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class SatisfactionRequest(BaseModel):
    """Satisfaction rating for an answered inquiry."""
    score: float = Field(..., description="Rating from 1 to 5")


class InquiryResponse(BaseModel):
    """Inquiry as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    message: str
    sender_name: str
    sender_email: Optional[str] = None
    category_id: Optional[str] = None
    response_template_id: Optional[str] = None
    response_message: Optional[str] = None
    confidence: Optional[float] = None
    response_time: Optional[float] = None
    is_automated: bool
    satisfaction_score: Optional[float] = None
    status: InquiryStatusStr
    created_at: datetime
    responded_at: Optional[datetime] = None


# ========== Analysis DTOs ==========

class AnalyzeRequest(BaseModel):
    """Preview request: analyze a message without storing it."""
    message: str = Field(..., min_length=1, max_length=5000)
    compare_to: Optional[str] = Field(
        None,
        max_length=5000,
        description="Optional text to compare against (Jaccard similarity)"
    )


class MatchPreview(BaseModel):
    """Template the message would be answered with."""
    template_id: str
    title: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    score: int = Field(..., ge=0)
    matched_keywords: List[str]


class AnalyzeResponse(BaseModel):
    """Result of a message analysis."""
    keywords: List[str]
    category_id: Optional[str] = None
    match: Optional[MatchPreview] = None
    similarity: Optional[float] = Field(None, ge=0.0, le=1.0)


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
