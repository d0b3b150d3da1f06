"""
Analytics Infrastructure Models
===============================

SQLAlchemy ORM models for the analytics module.
"""

import datetime as dt
from uuid import uuid4

from sqlalchemy import Date, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from triagedesk.infrastructure.database import Base


class AnalyticsSnapshotModel(Base):
    """
    Database model for AnalyticsSnapshot entity.

    One row per calendar day; recapturing a day overwrites it.
    """
    __tablename__ = "analytics_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, unique=True, index=True)

    total_inquiries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    automated_responses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    avg_response_time: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    avg_satisfaction_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    captured_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc)
    )
