"""
Helpdesk Infrastructure Layer
=============================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
- Seed: Starter data for empty databases
"""

from triagedesk.helpdesk.infrastructure.models import (
    CategoryModel,
    ResponseTemplateModel,
    InquiryModel,
)
from triagedesk.helpdesk.infrastructure.repositories import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyTemplateRepository,
    SQLAlchemyInquiryRepository,
)
from triagedesk.helpdesk.infrastructure.seed import seed_default_data

__all__ = [
    "CategoryModel",
    "ResponseTemplateModel",
    "InquiryModel",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyTemplateRepository",
    "SQLAlchemyInquiryRepository",
    "seed_default_data",
]
