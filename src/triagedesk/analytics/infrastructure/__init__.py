"""
Analytics Infrastructure Layer
==============================

Contains:
- Models: AnalyticsSnapshotModel
- Repositories: SQLAlchemyAnalyticsRepository
- External: AnalyticsScheduler (APScheduler)
"""

from triagedesk.analytics.infrastructure.models import AnalyticsSnapshotModel
from triagedesk.analytics.infrastructure.repositories import SQLAlchemyAnalyticsRepository
from triagedesk.analytics.infrastructure.external import AnalyticsScheduler

__all__ = [
    "AnalyticsSnapshotModel",
    "SQLAlchemyAnalyticsRepository",
    "AnalyticsScheduler",
]
