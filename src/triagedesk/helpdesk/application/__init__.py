"""
Helpdesk Application Layer
==========================

Application layer for the helpdesk module.

Contains:
- Services: Business logic orchestration
- DTOs: Data transfer objects for API serialization
"""

from triagedesk.helpdesk.application.dto import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    TemplateCreateRequest,
    TemplateUpdateRequest,
    TemplateResponse,
    InquiryCreateRequest,
    InquiryResponse,
    SatisfactionRequest,
    AnalyzeRequest,
    AnalyzeResponse,
    MatchPreview,
    MessageResponse,
)
from triagedesk.helpdesk.application.services import (
    CategoryService,
    TemplateService,
    InquiryService,
    ICategoryRepository,
    ITemplateRepository,
    IInquiryRepository,
    IInquiryMetricsExporter,
)

__all__ = [
    # DTOs
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "CategoryResponse",
    "TemplateCreateRequest",
    "TemplateUpdateRequest",
    "TemplateResponse",
    "InquiryCreateRequest",
    "InquiryResponse",
    "SatisfactionRequest",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "MatchPreview",
    "MessageResponse",
    # Services
    "CategoryService",
    "TemplateService",
    "InquiryService",
    # Repository Interfaces
    "ICategoryRepository",
    "ITemplateRepository",
    "IInquiryRepository",
    "IInquiryMetricsExporter",
]
