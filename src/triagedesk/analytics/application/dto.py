"""
Analytics Application DTOs
==========================

Pydantic response models for the analytics API.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DashboardResponse(BaseModel):
    """Headline dashboard metrics."""
    total_inquiries: int = Field(..., ge=0)
    automated_responses: int = Field(..., ge=0)
    avg_response_time: float = Field(..., ge=0.0, description="Seconds")
    avg_satisfaction_score: float = Field(..., ge=0.0, le=5.0)
    automation_rate: float = Field(..., ge=0.0, le=1.0, description="Automated share of all inquiries")


class TrendPointResponse(BaseModel):
    """One day of inquiry volume."""
    date: date
    day: str = Field(..., description="Weekday abbreviation")
    total_inquiries: int
    automated_responses: int


class CategoryShareResponse(BaseModel):
    """One slice of the category distribution."""
    category_id: Optional[str] = None
    name: str
    color: str
    value: int
    percentage: float


class SnapshotResponse(BaseModel):
    """Stored daily analytics snapshot."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    total_inquiries: int
    automated_responses: int
    avg_response_time: float
    avg_satisfaction_score: float
    captured_at: datetime


class SnapshotCaptureRequest(BaseModel):
    """Capture a snapshot for a given day (defaults to today, UTC)."""
    day: Optional[date] = None
