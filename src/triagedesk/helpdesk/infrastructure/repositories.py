"""
Helpdesk Infrastructure Repositories
====================================

SQLAlchemy implementations of helpdesk repositories.

Repositories translate between ORM models and domain entities so the
application layer never sees SQLAlchemy objects.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from triagedesk.helpdesk.application import (
    ICategoryRepository,
    IInquiryRepository,
    ITemplateRepository,
)
from triagedesk.helpdesk.domain import Category, Inquiry, ResponseTemplate
from triagedesk.helpdesk.infrastructure.models import (
    CategoryModel,
    InquiryModel,
    ResponseTemplateModel,
)
from triagedesk.core import RepositoryException


# ========== Model <-> Entity mapping ==========

def category_to_entity(model: CategoryModel) -> Category:
    return Category(
        id=model.id,
        name=model.name,
        color=model.color,
        description=model.description,
        created_at=model.created_at,
    )


def template_to_entity(model: ResponseTemplateModel) -> ResponseTemplate:
    return ResponseTemplate(
        id=model.id,
        title=model.title,
        content=model.content,
        keywords=list(model.keywords or []),
        category_id=model.category_id,
        is_active=model.is_active,
        usage_count=model.usage_count,
        success_rate=model.success_rate,
        position=model.position,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def inquiry_to_entity(model: InquiryModel) -> Inquiry:
    return Inquiry(
        id=model.id,
        message=model.message,
        sender_name=model.sender_name,
        sender_email=model.sender_email,
        category_id=model.category_id,
        response_template_id=model.response_template_id,
        response_message=model.response_message,
        confidence=model.confidence,
        response_time=model.response_time,
        is_automated=model.is_automated,
        satisfaction_score=model.satisfaction_score,
        status=model.status,
        created_at=model.created_at,
        responded_at=model.responded_at,
    )


def _apply_changes(model: Any, changes: Dict[str, Any]) -> None:
    for key, value in changes.items():
        if not hasattr(model, key):
            raise RepositoryException(f"Unknown field '{key}' for {type(model).__name__}")
        setattr(model, key, value)


class SQLAlchemyCategoryRepository(ICategoryRepository):
    """SQLAlchemy implementation for categories."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, category_id: str) -> Optional[CategoryModel]:
        return await self._session.get(CategoryModel, category_id)

    async def list(self) -> List[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.created_at, CategoryModel.name)
        result = await self._session.execute(stmt)
        return [category_to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        model = await self._get_model(category_id)
        return category_to_entity(model) if model else None

    async def create(self, category: Category) -> Category:
        model = CategoryModel(
            name=category.name,
            color=category.color,
            description=category.description,
            created_at=category.created_at,
        )
        if category.id:
            model.id = category.id

        self._session.add(model)
        await self._session.flush()

        return category_to_entity(model)

    async def update(self, category_id: str, changes: Dict[str, Any]) -> Optional[Category]:
        model = await self._get_model(category_id)
        if model is None:
            return None

        _apply_changes(model, changes)
        await self._session.flush()

        return category_to_entity(model)

    async def delete(self, category_id: str) -> bool:
        model = await self._get_model(category_id)
        if model is None:
            return False

        # Detach dependents explicitly; SQLite does not enforce ON DELETE by default
        await self._session.execute(
            update(ResponseTemplateModel)
            .where(ResponseTemplateModel.category_id == category_id)
            .values(category_id=None)
        )
        await self._session.execute(
            update(InquiryModel)
            .where(InquiryModel.category_id == category_id)
            .values(category_id=None)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyTemplateRepository(ITemplateRepository):
    """SQLAlchemy implementation for response templates."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, template_id: str) -> Optional[ResponseTemplateModel]:
        return await self._session.get(ResponseTemplateModel, template_id)

    def _ordered(self):
        return select(ResponseTemplateModel).order_by(
            ResponseTemplateModel.position,
            ResponseTemplateModel.created_at
        )

    async def list(self, category_id: Optional[str] = None) -> List[ResponseTemplate]:
        stmt = self._ordered()
        if category_id:
            stmt = stmt.where(ResponseTemplateModel.category_id == category_id)

        result = await self._session.execute(stmt)
        return [template_to_entity(m) for m in result.scalars().all()]

    async def list_active(self) -> List[ResponseTemplate]:
        stmt = self._ordered().where(ResponseTemplateModel.is_active.is_(True))
        result = await self._session.execute(stmt)
        return [template_to_entity(m) for m in result.scalars().all()]

    async def search(self, query: str) -> List[ResponseTemplate]:
        # Keywords live in a JSON column, so filtering happens in Python
        needle = query.lower()
        templates = await self.list()
        return [
            t for t in templates
            if needle in t.title.lower()
            or needle in t.content.lower()
            or any(needle in k.lower() for k in t.keywords)
        ]

    async def get_by_id(self, template_id: str) -> Optional[ResponseTemplate]:
        model = await self._get_model(template_id)
        return template_to_entity(model) if model else None

    async def create(self, template: ResponseTemplate) -> ResponseTemplate:
        next_position = await self._session.scalar(
            select(func.coalesce(func.max(ResponseTemplateModel.position), -1) + 1)
        )

        model = ResponseTemplateModel(
            title=template.title,
            content=template.content,
            keywords=list(template.keywords),
            category_id=template.category_id,
            is_active=template.is_active,
            usage_count=template.usage_count,
            success_rate=template.success_rate,
            position=next_position,
            created_at=template.created_at,
            updated_at=template.updated_at,
        )
        if template.id:
            model.id = template.id

        self._session.add(model)
        await self._session.flush()

        return template_to_entity(model)

    async def update(self, template_id: str, changes: Dict[str, Any]) -> Optional[ResponseTemplate]:
        model = await self._get_model(template_id)
        if model is None:
            return None

        if "keywords" in changes and changes["keywords"] is not None:
            changes = {**changes, "keywords": list(changes["keywords"])}
        _apply_changes(model, changes)
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()

        return template_to_entity(model)

    async def delete(self, template_id: str) -> bool:
        model = await self._get_model(template_id)
        if model is None:
            return False

        await self._session.execute(
            update(InquiryModel)
            .where(InquiryModel.response_template_id == template_id)
            .values(response_template_id=None)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def increment_usage(self, template_id: str) -> None:
        """Single UPDATE so concurrent submissions never lose a count."""
        stmt = (
            update(ResponseTemplateModel)
            .where(ResponseTemplateModel.id == template_id)
            .values(usage_count=ResponseTemplateModel.usage_count + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise RepositoryException(f"Response template {template_id} not found")


class SQLAlchemyInquiryRepository(IInquiryRepository):
    """SQLAlchemy implementation for inquiries."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self, limit: Optional[int] = None) -> List[Inquiry]:
        stmt = select(InquiryModel).order_by(InquiryModel.created_at.desc())
        if limit:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return [inquiry_to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, inquiry_id: str) -> Optional[Inquiry]:
        model = await self._session.get(InquiryModel, inquiry_id)
        return inquiry_to_entity(model) if model else None

    async def create(self, inquiry: Inquiry) -> Inquiry:
        model = InquiryModel(
            message=inquiry.message,
            sender_name=inquiry.sender_name,
            sender_email=inquiry.sender_email,
            category_id=inquiry.category_id,
            response_template_id=inquiry.response_template_id,
            response_message=inquiry.response_message,
            confidence=inquiry.confidence,
            response_time=inquiry.response_time,
            is_automated=inquiry.is_automated,
            satisfaction_score=inquiry.satisfaction_score,
            status=inquiry.status,
            created_at=inquiry.created_at,
            responded_at=inquiry.responded_at,
        )
        if inquiry.id:
            model.id = inquiry.id

        self._session.add(model)
        await self._session.flush()

        return inquiry_to_entity(model)

    async def save(self, inquiry: Inquiry) -> Inquiry:
        model = await self._session.get(InquiryModel, inquiry.id)
        if model is None:
            raise RepositoryException(f"Inquiry {inquiry.id} not found")

        model.category_id = inquiry.category_id
        model.response_template_id = inquiry.response_template_id
        model.response_message = inquiry.response_message
        model.confidence = inquiry.confidence
        model.response_time = inquiry.response_time
        model.is_automated = inquiry.is_automated
        model.satisfaction_score = inquiry.satisfaction_score
        model.status = inquiry.status
        model.responded_at = inquiry.responded_at

        await self._session.flush()

        return inquiry_to_entity(model)

