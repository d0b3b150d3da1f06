"""
Helpdesk Domain Layer
=====================

Contains:
- Entities: Category, ResponseTemplate, Inquiry

This layer is framework-agnostic and contains pure business logic.
"""

from triagedesk.helpdesk.domain.entities import (
    Category,
    ResponseTemplate,
    Inquiry,
)

__all__ = [
    "Category",
    "ResponseTemplate",
    "Inquiry",
]
