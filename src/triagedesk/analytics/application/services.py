"""
Analytics Application Services
==============================

Computes dashboard figures from stored inquiries and manages daily
snapshots.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from triagedesk.core import ValidationException
from triagedesk.analytics.domain import (
    AnalyticsSnapshot,
    CategoryShare,
    DashboardMetrics,
    InquiryAggregate,
    TrendPoint,
    build_category_distribution,
    build_trend,
    day_bounds,
)
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

MAX_TREND_DAYS = 90


# ========== Repository Interface ==========

class IAnalyticsRepository(ABC):
    """Read access to inquiries plus snapshot storage."""

    @abstractmethod
    async def aggregate_inquiries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> InquiryAggregate:
        """Totals over inquiries created in [start, end)."""

    @abstractmethod
    async def inquiry_activity(self, since: datetime) -> List[Tuple[datetime, bool]]:
        """(created_at, is_automated) for inquiries created since a moment."""

    @abstractmethod
    async def count_by_category(self) -> Dict[Optional[str], int]:
        """Inquiry count keyed by category id."""

    @abstractmethod
    async def list_categories(self) -> List[Tuple[str, str, str]]:
        """(id, name, color) for every category."""

    @abstractmethod
    async def upsert_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        """Insert or replace the snapshot for snapshot.date."""

    @abstractmethod
    async def list_snapshots(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[AnalyticsSnapshot]:
        """Snapshots with start <= date <= end, oldest first."""


# ========== Application Service ==========

class AnalyticsService:
    """Dashboard analytics."""

    def __init__(self, repository: IAnalyticsRepository):
        self._repo = repository

    async def get_dashboard(self) -> DashboardMetrics:
        aggregate = await self._repo.aggregate_inquiries()
        return DashboardMetrics.from_aggregate(aggregate)

    async def get_trends(self, days: int = 7, today: Optional[date] = None) -> List[TrendPoint]:
        """Per-day totals for the last `days` days, today included."""
        if not 1 <= days <= MAX_TREND_DAYS:
            raise ValidationException(
                f"days must be between 1 and {MAX_TREND_DAYS}",
                {"days": days}
            )

        today = today or datetime.now(timezone.utc).date()
        since, _ = day_bounds(today - timedelta(days=days - 1))
        rows = await self._repo.inquiry_activity(since)
        return build_trend(rows, days, today)

    async def get_category_distribution(self) -> List[CategoryShare]:
        counts = await self._repo.count_by_category()
        categories = await self._repo.list_categories()
        return build_category_distribution(counts, categories)

    async def capture_snapshot(self, day: Optional[date] = None) -> AnalyticsSnapshot:
        """
        Roll up one day of inquiries into a stored snapshot.

        Capturing the same day again replaces the earlier snapshot.
        """
        day = day or datetime.now(timezone.utc).date()
        start, end = day_bounds(day)

        aggregate = await self._repo.aggregate_inquiries(start, end)
        snapshot = await self._repo.upsert_snapshot(AnalyticsSnapshot.for_day(day, aggregate))

        logger.info(
            "Analytics snapshot captured",
            extra={
                "date": day.isoformat(),
                "total_inquiries": snapshot.total_inquiries,
                "automated_responses": snapshot.automated_responses
            }
        )
        return snapshot

    async def list_snapshots(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[AnalyticsSnapshot]:
        if start and end and start > end:
            raise ValidationException(
                "start must not be after end",
                {"start": start.isoformat(), "end": end.isoformat()}
            )
        return await self._repo.list_snapshots(start, end)
