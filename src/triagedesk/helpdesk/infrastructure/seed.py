"""
Default Helpdesk Data
=====================

Starter categories and response templates for a fresh database.

Seeding only runs when the categories table is empty, so restarting the
service never duplicates rows or overwrites edits.
"""

from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from triagedesk.helpdesk.domain import Category, ResponseTemplate
from triagedesk.helpdesk.infrastructure.models import CategoryModel
from triagedesk.helpdesk.infrastructure.repositories import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyTemplateRepository,
)
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


DEFAULT_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Technical Support", "description": "Technical issues and troubleshooting", "color": "#1976D2"},
    {"name": "Academic", "description": "Academic inquiries and grade-related questions", "color": "#388E3C"},
    {"name": "Administrative", "description": "Administrative processes and procedures", "color": "#9C27B0"},
    {"name": "General", "description": "General information and miscellaneous", "color": "#FF9800"},
]

DEFAULT_TEMPLATES: List[Dict] = [
    {
        "category": "Technical Support",
        "title": "Assignment Portal Access",
        "content": (
            "Hi! I can help you with accessing the assignment portal. Here are the steps:\n"
            "1. Go to the student dashboard\n"
            "2. Click on 'Assignments' in the menu\n"
            "3. Select your course from the dropdown\n\n"
            "If you continue to have issues, please contact technical support."
        ),
        "keywords": ["assignment", "portal", "access", "login", "dashboard", "help", "how", "submit"],
        "usage_count": 847,
        "success_rate": 0.94,
    },
    {
        "category": "Academic",
        "title": "Grade Inquiry Response",
        "content": (
            "Thank you for your grade inquiry. To check your current grades:\n"
            "1. Log into the student portal\n"
            "2. Navigate to 'Grades' section\n"
            "3. Select the specific course\n\n"
            "If you have questions about a specific grade, please contact your instructor directly."
        ),
        "keywords": ["grade", "grades", "score", "marks", "assessment"],
        "usage_count": 623,
        "success_rate": 0.88,
    },
    {
        "category": "Administrative",
        "title": "Schedule Information",
        "content": (
            "For class schedule information:\n"
            "1. Check your student portal under 'Schedule'\n"
            "2. Download the course calendar\n"
            "3. Set up calendar sync for automatic updates\n\n"
            "Class times may change, so please check regularly for updates."
        ),
        "keywords": ["schedule", "timetable", "class", "timing", "calendar"],
        "usage_count": 412,
        "success_rate": 0.91,
    },
    {
        "category": "General",
        "title": "General Greeting",
        "content": (
            "Hello! Welcome to our educational support system. I'm here to help you with any questions about:\n\n"
            "• Assignment submissions and portal access\n"
            "• Grade inquiries and academic records\n"
            "• Class schedules and course information\n"
            "• Technical support for our systems\n\n"
            "How can I assist you today?"
        ),
        "keywords": ["hello", "hi", "hey", "help", "support", "assist", "question"],
        "usage_count": 156,
        "success_rate": 0.96,
    },
]


async def seed_default_data(session: AsyncSession) -> bool:
    """
    Insert starter data into an empty database.

    Args:
        session: Open session; the caller commits

    Returns:
        True if rows were inserted
    """
    existing = await session.scalar(select(func.count()).select_from(CategoryModel))
    if existing:
        logger.debug("Skipping seed, categories present", extra={"categories": existing})
        return False

    category_repo = SQLAlchemyCategoryRepository(session)
    template_repo = SQLAlchemyTemplateRepository(session)

    ids_by_name: Dict[str, str] = {}
    for data in DEFAULT_CATEGORIES:
        category = await category_repo.create(Category(id=None, **data))
        ids_by_name[category.name] = category.id

    for data in DEFAULT_TEMPLATES:
        fields = {k: v for k, v in data.items() if k != "category"}
        await template_repo.create(ResponseTemplate(
            id=None,
            category_id=ids_by_name[data["category"]],
            **fields
        ))

    logger.info(
        "Seeded default helpdesk data",
        extra={"categories": len(DEFAULT_CATEGORIES), "templates": len(DEFAULT_TEMPLATES)}
    )
    return True
