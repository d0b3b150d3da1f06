"""
Helpdesk Interfaces Layer
=========================

Interface adapters (controllers) for the helpdesk module.

Contains:
- Controllers: FastAPI route handlers
"""

from triagedesk.helpdesk.interfaces.controllers import (
    categories_router,
    templates_router,
    inquiries_router,
)

__all__ = ["categories_router", "templates_router", "inquiries_router"]
