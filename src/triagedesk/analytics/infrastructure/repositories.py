"""
Analytics Infrastructure Repositories
=====================================

SQLAlchemy implementation of the analytics repository.

Reads the helpdesk tables directly; aggregation happens in SQL.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from triagedesk.analytics.application import IAnalyticsRepository
from triagedesk.analytics.domain import AnalyticsSnapshot, InquiryAggregate
from triagedesk.analytics.infrastructure.models import AnalyticsSnapshotModel
from triagedesk.helpdesk.infrastructure.models import CategoryModel, InquiryModel


def snapshot_to_entity(model: AnalyticsSnapshotModel) -> AnalyticsSnapshot:
    return AnalyticsSnapshot(
        id=model.id,
        date=model.date,
        total_inquiries=model.total_inquiries,
        automated_responses=model.automated_responses,
        avg_response_time=model.avg_response_time,
        avg_satisfaction_score=model.avg_satisfaction_score,
        captured_at=model.captured_at,
    )


class SQLAlchemyAnalyticsRepository(IAnalyticsRepository):
    """SQLAlchemy implementation for analytics queries and snapshots."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def aggregate_inquiries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> InquiryAggregate:
        stmt = select(
            func.count(InquiryModel.id),
            func.coalesce(func.sum(case((InquiryModel.is_automated.is_(True), 1), else_=0)), 0),
            func.avg(InquiryModel.response_time),
            func.avg(InquiryModel.satisfaction_score),
        )
        if start is not None:
            stmt = stmt.where(InquiryModel.created_at >= start)
        if end is not None:
            stmt = stmt.where(InquiryModel.created_at < end)

        total, automated, avg_response_time, avg_satisfaction = (await self._session.execute(stmt)).one()

        return InquiryAggregate(
            total_inquiries=int(total or 0),
            automated_responses=int(automated or 0),
            avg_response_time=float(avg_response_time) if avg_response_time is not None else None,
            avg_satisfaction_score=float(avg_satisfaction) if avg_satisfaction is not None else None,
        )

    async def inquiry_activity(self, since: datetime) -> List[Tuple[datetime, bool]]:
        stmt = (
            select(InquiryModel.created_at, InquiryModel.is_automated)
            .where(InquiryModel.created_at >= since)
            .order_by(InquiryModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [(row.created_at, row.is_automated) for row in result]

    async def count_by_category(self) -> Dict[Optional[str], int]:
        stmt = (
            select(InquiryModel.category_id, func.count(InquiryModel.id))
            .group_by(InquiryModel.category_id)
        )
        result = await self._session.execute(stmt)
        return {category_id: count for category_id, count in result}

    async def list_categories(self) -> List[Tuple[str, str, str]]:
        stmt = (
            select(CategoryModel.id, CategoryModel.name, CategoryModel.color)
            .order_by(CategoryModel.created_at, CategoryModel.name)
        )
        result = await self._session.execute(stmt)
        return [(row.id, row.name, row.color) for row in result]

    async def upsert_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        stmt = select(AnalyticsSnapshotModel).where(AnalyticsSnapshotModel.date == snapshot.date)
        model = (await self._session.execute(stmt)).scalar_one_or_none()

        if model is None:
            model = AnalyticsSnapshotModel(date=snapshot.date)
            self._session.add(model)

        model.total_inquiries = snapshot.total_inquiries
        model.automated_responses = snapshot.automated_responses
        model.avg_response_time = snapshot.avg_response_time
        model.avg_satisfaction_score = snapshot.avg_satisfaction_score
        model.captured_at = snapshot.captured_at

        await self._session.flush()

        return snapshot_to_entity(model)

    async def list_snapshots(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[AnalyticsSnapshot]:
        stmt = select(AnalyticsSnapshotModel).order_by(AnalyticsSnapshotModel.date)
        if start is not None:
            stmt = stmt.where(AnalyticsSnapshotModel.date >= start)
        if end is not None:
            stmt = stmt.where(AnalyticsSnapshotModel.date <= end)

        result = await self._session.execute(stmt)
        return [snapshot_to_entity(m) for m in result.scalars().all()]
