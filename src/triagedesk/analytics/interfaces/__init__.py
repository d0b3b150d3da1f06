"""
Analytics Interfaces Layer
==========================

Contains:
- Controllers: FastAPI route handlers
"""

from triagedesk.analytics.interfaces.controllers import analytics_router

__all__ = ["analytics_router"]
