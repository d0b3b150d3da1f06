"""
Analytics Domain Layer
======================

Contains:
- Entities: DashboardMetrics, TrendPoint, CategoryShare, AnalyticsSnapshot
- Pure aggregation helpers for trends and category distribution
"""

from triagedesk.analytics.domain.entities import (
    InquiryAggregate,
    DashboardMetrics,
    TrendPoint,
    CategoryShare,
    AnalyticsSnapshot,
    as_utc,
    day_bounds,
    build_trend,
    build_category_distribution,
)

__all__ = [
    "InquiryAggregate",
    "DashboardMetrics",
    "TrendPoint",
    "CategoryShare",
    "AnalyticsSnapshot",
    "as_utc",
    "day_bounds",
    "build_trend",
    "build_category_distribution",
]
