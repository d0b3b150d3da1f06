"""
Analytics Controllers (API Routes)
==================================

FastAPI routes for dashboard metrics, trends and snapshots.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from triagedesk.infrastructure.database import get_session
from triagedesk.config import settings
from triagedesk.analytics.application import (
    AnalyticsService,
    DashboardResponse,
    TrendPointResponse,
    CategoryShareResponse,
    SnapshotResponse,
    SnapshotCaptureRequest,
    MAX_TREND_DAYS,
)
from triagedesk.analytics.infrastructure import SQLAlchemyAnalyticsRepository

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


# ========== Example payloads for Swagger ==========

DASHBOARD_RESPONSE_EXAMPLE = {
    "total_inquiries": 120,
    "automated_responses": 97,
    "avg_response_time": 0.0031,
    "avg_satisfaction_score": 4.6,
    "automation_rate": 0.8083
}

CATEGORY_DISTRIBUTION_EXAMPLE = [
    {"category_id": "0b6f7c1e-5d0a-4a8e-8f3b-1f2e3d4c5b6a", "name": "Technical Support",
     "color": "#1976D2", "value": 42, "percentage": 35.0},
    {"category_id": None, "name": "Other", "color": "#F44336", "value": 6, "percentage": 5.0}
]


# ========== Dependencies ==========

async def get_analytics_service(
    session: AsyncSession = Depends(get_session)
) -> AnalyticsService:
    return AnalyticsService(SQLAlchemyAnalyticsRepository(session))


# ========== Route Handlers ==========

@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard headline metrics",
    description="""
    Totals and averages over all stored inquiries.

    - `avg_response_time`: mean over inquiries that received a response (seconds)
    - `avg_satisfaction_score`: mean over rated inquiries (1-5)
    - `automation_rate`: automated responses / total inquiries (0-1)

    An empty database reports zeros.
    """,
    responses={
        200: {
            "description": "Dashboard metrics",
            "content": {"application/json": {"example": DASHBOARD_RESPONSE_EXAMPLE}}
        }
    }
)
async def get_dashboard(service: AnalyticsService = Depends(get_analytics_service)):
    return await service.get_dashboard()


@router.get(
    "/trends",
    response_model=List[TrendPointResponse],
    summary="Daily inquiry volume",
    description="One point per day, oldest first, ending today (UTC)."
)
async def get_trends(
    days: int = Query(
        settings.trend_days,
        ge=1,
        le=MAX_TREND_DAYS,
        description="Number of days to include"
    ),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return await service.get_trends(days)


@router.get(
    "/categories",
    response_model=List[CategoryShareResponse],
    summary="Inquiry share per category",
    description="Uncategorized inquiries are grouped under \"Other\".",
    responses={
        200: {
            "description": "Category distribution",
            "content": {"application/json": {"example": CATEGORY_DISTRIBUTION_EXAMPLE}}
        }
    }
)
async def get_category_distribution(service: AnalyticsService = Depends(get_analytics_service)):
    return await service.get_category_distribution()


@router.get(
    "/snapshots",
    response_model=List[SnapshotResponse],
    summary="Stored daily snapshots",
    responses={400: {"description": "start is after end"}}
)
async def list_snapshots(
    start: Optional[date] = Query(None, description="First day (inclusive)"),
    end: Optional[date] = Query(None, description="Last day (inclusive)"),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return await service.list_snapshots(start, end)


@router.post(
    "/snapshots",
    response_model=SnapshotResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Capture a snapshot now",
    description="Rolls up one day (default today, UTC); an existing snapshot for that day is replaced."
)
async def capture_snapshot(
    payload: Optional[SnapshotCaptureRequest] = Body(None),
    service: AnalyticsService = Depends(get_analytics_service)
):
    day = payload.day if payload else None
    return await service.capture_snapshot(day)


# Export for main.py
analytics_router = router
