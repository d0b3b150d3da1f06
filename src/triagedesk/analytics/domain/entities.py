"""
Analytics Domain Entities
=========================

Dashboard figures derived from stored inquiries, plus the pure functions
that bucket them by day and by category.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from triagedesk.config import UNCATEGORIZED_COLOR, UNCATEGORIZED_LABEL


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open UTC interval covering one calendar day."""
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


@dataclass(frozen=True)
class InquiryAggregate:
    """Raw totals over a set of inquiries."""
    total_inquiries: int = 0
    automated_responses: int = 0
    avg_response_time: Optional[float] = None
    avg_satisfaction_score: Optional[float] = None


@dataclass(frozen=True)
class DashboardMetrics:
    """
    Headline numbers for the dashboard.

    Averages only consider inquiries that have the value; an empty
    database reports zeros.
    """
    total_inquiries: int
    automated_responses: int
    avg_response_time: float
    avg_satisfaction_score: float
    automation_rate: float

    @classmethod
    def from_aggregate(cls, aggregate: InquiryAggregate) -> "DashboardMetrics":
        total = aggregate.total_inquiries
        return cls(
            total_inquiries=total,
            automated_responses=aggregate.automated_responses,
            avg_response_time=round(aggregate.avg_response_time or 0.0, 4),
            avg_satisfaction_score=round(aggregate.avg_satisfaction_score or 0.0, 2),
            automation_rate=round(aggregate.automated_responses / total, 4) if total else 0.0,
        )


@dataclass(frozen=True)
class TrendPoint:
    """Inquiry volume for one day."""
    date: date
    day: str
    total_inquiries: int
    automated_responses: int


@dataclass(frozen=True)
class CategoryShare:
    """Slice of the category distribution chart."""
    category_id: Optional[str]
    name: str
    color: str
    value: int
    percentage: float


@dataclass
class AnalyticsSnapshot:
    """Stored daily roll-up, one per calendar day."""
    id: Optional[str]
    date: date
    total_inquiries: int = 0
    automated_responses: int = 0
    avg_response_time: float = 0.0
    avg_satisfaction_score: float = 0.0
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_day(cls, day: date, aggregate: InquiryAggregate) -> "AnalyticsSnapshot":
        metrics = DashboardMetrics.from_aggregate(aggregate)
        return cls(
            id=None,
            date=day,
            total_inquiries=metrics.total_inquiries,
            automated_responses=metrics.automated_responses,
            avg_response_time=metrics.avg_response_time,
            avg_satisfaction_score=metrics.avg_satisfaction_score,
        )


def build_trend(
    rows: Iterable[Tuple[datetime, bool]],
    days: int,
    today: date
) -> List[TrendPoint]:
    """
    Bucket (created_at, is_automated) rows into one point per day.

    Returns `days` points ending with `today`, oldest first; days without
    inquiries are zero.
    """
    first_day = today - timedelta(days=days - 1)
    totals: Dict[date, List[int]] = {
        first_day + timedelta(days=offset): [0, 0] for offset in range(days)
    }

    for created_at, is_automated in rows:
        bucket = totals.get(as_utc(created_at).date())
        if bucket is None:
            continue
        bucket[0] += 1
        if is_automated:
            bucket[1] += 1

    return [
        TrendPoint(
            date=day,
            day=day.strftime("%a"),
            total_inquiries=counts[0],
            automated_responses=counts[1],
        )
        for day, counts in sorted(totals.items())
    ]


def build_category_distribution(
    counts: Dict[Optional[str], int],
    categories: Sequence[Tuple[str, str, str]]
) -> List[CategoryShare]:
    """
    Turn per-category inquiry counts into chart slices.

    Args:
        counts: Inquiry count keyed by category id (None for uncategorized)
        categories: (id, name, color) in display order

    Every category gets a slice, even at zero. Inquiries without a known
    category are grouped under a trailing "Other" slice, present only when
    non-empty.
    """
    total = sum(counts.values())

    def percentage(value: int) -> float:
        return round(value * 100.0 / total, 1) if total else 0.0

    shares = []
    known = set()
    for category_id, name, color in categories:
        known.add(category_id)
        value = counts.get(category_id, 0)
        shares.append(CategoryShare(
            category_id=category_id,
            name=name,
            color=color,
            value=value,
            percentage=percentage(value),
        ))

    other = sum(value for key, value in counts.items() if key not in known)
    if other:
        shares.append(CategoryShare(
            category_id=None,
            name=UNCATEGORIZED_LABEL,
            color=UNCATEGORIZED_COLOR,
            value=other,
            percentage=percentage(other),
        ))

    return shares
