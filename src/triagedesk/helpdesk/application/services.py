"""
Helpdesk Application Services
=============================

Application services orchestrate business logic and coordinate between
domain entities, the matching engine and repositories.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on repository abstractions
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol

from triagedesk.config import MIN_SATISFACTION_SCORE, MAX_SATISFACTION_SCORE
from triagedesk.core import (
    ResourceNotFoundException,
    UndefinedSimilarityException,
    ValidationException,
)
from triagedesk.helpdesk.application.dto import (
    AnalyzeRequest,
    AnalyzeResponse,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    InquiryCreateRequest,
    MatchPreview,
    TemplateCreateRequest,
    TemplateUpdateRequest,
)
from triagedesk.helpdesk.domain import Category, Inquiry, ResponseTemplate
from triagedesk.matching.application import MatchingService
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class ICategoryRepository(ABC):
    """Interface for category data access."""

    @abstractmethod
    async def list(self) -> List[Category]:
        """List categories in creation order."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Create new category."""

    @abstractmethod
    async def update(self, category_id: str, changes: Dict[str, Any]) -> Optional[Category]:
        """Apply a partial update."""

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Delete category, returning whether it existed."""


class ITemplateRepository(ABC):
    """Interface for response template data access."""

    @abstractmethod
    async def list(self, category_id: Optional[str] = None) -> List[ResponseTemplate]:
        """List templates in insertion order, optionally for one category."""

    @abstractmethod
    async def list_active(self) -> List[ResponseTemplate]:
        """List active templates in insertion order."""

    @abstractmethod
    async def search(self, query: str) -> List[ResponseTemplate]:
        """Case-insensitive search over title, content and keywords."""

    @abstractmethod
    async def get_by_id(self, template_id: str) -> Optional[ResponseTemplate]:
        """Get template by ID."""

    @abstractmethod
    async def create(self, template: ResponseTemplate) -> ResponseTemplate:
        """Create new template."""

    @abstractmethod
    async def update(self, template_id: str, changes: Dict[str, Any]) -> Optional[ResponseTemplate]:
        """Apply a partial update."""

    @abstractmethod
    async def delete(self, template_id: str) -> bool:
        """Delete template, returning whether it existed."""

    @abstractmethod
    async def increment_usage(self, template_id: str) -> None:
        """Atomically add one to usage_count."""


class IInquiryRepository(ABC):
    """Interface for inquiry data access."""

    @abstractmethod
    async def list(self, limit: Optional[int] = None) -> List[Inquiry]:
        """List inquiries, newest first."""

    @abstractmethod
    async def get_by_id(self, inquiry_id: str) -> Optional[Inquiry]:
        """Get inquiry by ID."""

    @abstractmethod
    async def create(self, inquiry: Inquiry) -> Inquiry:
        """Create new inquiry."""

    @abstractmethod
    async def save(self, inquiry: Inquiry) -> Inquiry:
        """Persist all mutable fields of an existing inquiry."""


class IInquiryMetricsExporter(Protocol):
    """Anything that can push per-inquiry automation metrics."""

    def is_enabled(self) -> bool:
        """Whether exports are sent anywhere."""

    async def export_inquiry_metrics(
        self,
        automated: bool,
        confidence: float,
        processing_ms: int,
        template_id: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> bool:
        """Export one inquiry outcome."""


# ========== Application Services ==========

class CategoryService:
    """Category management."""

    def __init__(self, category_repository: ICategoryRepository):
        self._category_repo = category_repository

    async def list_categories(self) -> List[Category]:
        return await self._category_repo.list()

    async def get_category(self, category_id: str) -> Category:
        category = await self._category_repo.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundException("Category", category_id)
        return category

    async def create_category(self, request: CategoryCreateRequest) -> Category:
        category = await self._category_repo.create(Category(
            id=None,
            name=request.name,
            color=request.color,
            description=request.description,
        ))
        logger.info("Category created", extra={"category_id": category.id, "category_name": category.name})
        return category

    async def update_category(self, category_id: str, request: CategoryUpdateRequest) -> Category:
        changes = request.model_dump(exclude_unset=True)
        category = await self._category_repo.update(category_id, changes)
        if category is None:
            raise ResourceNotFoundException("Category", category_id)
        return category

    async def delete_category(self, category_id: str) -> None:
        if not await self._category_repo.delete(category_id):
            raise ResourceNotFoundException("Category", category_id)
        logger.info("Category deleted", extra={"category_id": category_id})


class TemplateService:
    """Response template management."""

    def __init__(
        self,
        template_repository: ITemplateRepository,
        category_repository: ICategoryRepository
    ):
        self._template_repo = template_repository
        self._category_repo = category_repository

    async def _ensure_category(self, category_id: Optional[str]) -> None:
        if category_id and await self._category_repo.get_by_id(category_id) is None:
            raise ValidationException(
                f"Unknown category '{category_id}'",
                {"category_id": category_id}
            )

    async def list_templates(
        self,
        search: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> List[ResponseTemplate]:
        """Search takes precedence over the category filter."""
        if search:
            return await self._template_repo.search(search)
        return await self._template_repo.list(category_id=category_id)

    async def get_template(self, template_id: str) -> ResponseTemplate:
        template = await self._template_repo.get_by_id(template_id)
        if template is None:
            raise ResourceNotFoundException("Response template", template_id)
        return template

    async def create_template(self, request: TemplateCreateRequest) -> ResponseTemplate:
        await self._ensure_category(request.category_id)
        template = await self._template_repo.create(ResponseTemplate(
            id=None,
            title=request.title,
            content=request.content,
            keywords=request.keywords,
            category_id=request.category_id,
            is_active=request.is_active,
        ))
        logger.info(
            "Response template created",
            extra={"template_id": template.id, "keywords": len(template.keywords)}
        )
        return template

    async def update_template(self, template_id: str, request: TemplateUpdateRequest) -> ResponseTemplate:
        changes = request.model_dump(exclude_unset=True)
        if "category_id" in changes:
            await self._ensure_category(changes["category_id"])
        template = await self._template_repo.update(template_id, changes)
        if template is None:
            raise ResourceNotFoundException("Response template", template_id)
        return template

    async def delete_template(self, template_id: str) -> None:
        if not await self._template_repo.delete(template_id):
            raise ResourceNotFoundException("Response template", template_id)
        logger.info("Response template deleted", extra={"template_id": template_id})


class InquiryService:
    """
    Inquiry intake and automated response.

    Submitting an inquiry stores it as pending, assigns a category, asks the
    matcher for a template and, on a match, records the automated reply and
    bumps the template's usage counter.
    """

    def __init__(
        self,
        inquiry_repository: IInquiryRepository,
        template_repository: ITemplateRepository,
        category_repository: ICategoryRepository,
        matching_service: MatchingService,
        metrics_exporter: Optional[IInquiryMetricsExporter] = None
    ):
        self._inquiry_repo = inquiry_repository
        self._template_repo = template_repository
        self._category_repo = category_repository
        self._matching = matching_service
        self._exporter = metrics_exporter

    async def list_inquiries(self, limit: Optional[int] = None) -> List[Inquiry]:
        return await self._inquiry_repo.list(limit=limit)

    async def get_inquiry(self, inquiry_id: str) -> Inquiry:
        inquiry = await self._inquiry_repo.get_by_id(inquiry_id)
        if inquiry is None:
            raise ResourceNotFoundException("Inquiry", inquiry_id)
        return inquiry

    async def _resolve_category(self, request: InquiryCreateRequest) -> Optional[str]:
        if request.category_id:
            if await self._category_repo.get_by_id(request.category_id) is None:
                raise ValidationException(
                    f"Unknown category '{request.category_id}'",
                    {"category_id": request.category_id}
                )
            return request.category_id

        categories = await self._category_repo.list()
        return self._matching.categorize(request.message, categories)

    async def submit_inquiry(self, request: InquiryCreateRequest) -> Inquiry:
        """
        Store an inquiry and answer it automatically when a template matches.

        Returns:
            The inquiry, responded when a template matched, pending otherwise
        """
        start_time = time.perf_counter()

        category_id = await self._resolve_category(request)
        inquiry = await self._inquiry_repo.create(Inquiry(
            id=None,
            message=request.message,
            sender_name=request.sender_name,
            sender_email=request.sender_email,
            category_id=category_id,
        ))

        templates = await self._template_repo.list_active()
        result = self._matching.match(inquiry.message, templates)

        if result is not None:
            inquiry.respond_with_template(
                result.template,
                confidence=result.confidence,
                response_time=round(time.perf_counter() - start_time, 4)
            )
            inquiry = await self._inquiry_repo.save(inquiry)
            await self._template_repo.increment_usage(result.template.id)

        processing_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            "Inquiry processed",
            extra={
                "inquiry_id": inquiry.id,
                "category_id": category_id,
                "automated": inquiry.is_automated,
                "template_id": inquiry.response_template_id,
                "confidence": inquiry.confidence,
                "processing_time_ms": processing_ms
            }
        )

        if self._exporter is not None and self._exporter.is_enabled():
            await self._exporter.export_inquiry_metrics(
                automated=inquiry.is_automated,
                confidence=inquiry.confidence or 0.0,
                processing_ms=processing_ms,
                template_id=inquiry.response_template_id,
                category_id=category_id
            )

        return inquiry

    async def rate_inquiry(self, inquiry_id: str, score: float) -> Inquiry:
        """Record a 1-5 satisfaction score."""
        if not MIN_SATISFACTION_SCORE <= score <= MAX_SATISFACTION_SCORE:
            raise ValidationException(
                f"Satisfaction score must be between {MIN_SATISFACTION_SCORE} and {MAX_SATISFACTION_SCORE}",
                {"score": score}
            )

        inquiry = await self.get_inquiry(inquiry_id)
        inquiry.satisfaction_score = score
        return await self._inquiry_repo.save(inquiry)

    async def escalate_inquiry(self, inquiry_id: str) -> Inquiry:
        """Move a pending inquiry to a human agent."""
        inquiry = await self.get_inquiry(inquiry_id)
        inquiry.escalate()
        inquiry = await self._inquiry_repo.save(inquiry)
        logger.info("Inquiry escalated", extra={"inquiry_id": inquiry_id})
        return inquiry

    async def analyze_message(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """
        Preview what submitting the message would do, without storing anything.

        Similarity of two token-less texts is reported as 0.0.
        """
        categories = await self._category_repo.list()
        templates = await self._template_repo.list_active()

        result = self._matching.match(request.message, templates)
        match = None
        if result is not None:
            match = MatchPreview(
                template_id=result.template.id,
                title=result.template.title,
                confidence=result.confidence,
                score=result.score,
                matched_keywords=result.matched_keywords,
            )

        similarity = None
        if request.compare_to is not None:
            try:
                similarity = self._matching.similarity(request.message, request.compare_to)
            except UndefinedSimilarityException:
                similarity = 0.0

        return AnalyzeResponse(
            keywords=self._matching.extract_keywords(request.message),
            category_id=self._matching.categorize(request.message, categories),
            match=match,
            similarity=similarity,
        )
