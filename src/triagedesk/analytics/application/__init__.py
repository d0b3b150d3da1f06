"""
Analytics Application Layer
===========================

Contains:
- Services: AnalyticsService
- DTOs: API response models
"""

from triagedesk.analytics.application.dto import (
    DashboardResponse,
    TrendPointResponse,
    CategoryShareResponse,
    SnapshotResponse,
    SnapshotCaptureRequest,
)
from triagedesk.analytics.application.services import (
    AnalyticsService,
    IAnalyticsRepository,
    MAX_TREND_DAYS,
)

__all__ = [
    "DashboardResponse",
    "TrendPointResponse",
    "CategoryShareResponse",
    "SnapshotResponse",
    "SnapshotCaptureRequest",
    "AnalyticsService",
    "IAnalyticsRepository",
    "MAX_TREND_DAYS",
]
