"""
Helpdesk Domain Entities
========================

Pure Python business objects for categories, response templates and
inquiries.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from triagedesk.config import InquiryStatus, DEFAULT_CATEGORY_COLOR
from triagedesk.core import InvalidStatusTransitionException


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Category:
    """Inquiry category shown on the dashboard."""
    id: Optional[str]
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    description: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class ResponseTemplate:
    """
    Canned reply that can be sent automatically.

    usage_count is only incremented after an automated response;
    success_rate is maintained outside the matcher.
    """
    id: Optional[str]
    title: str
    content: str
    keywords: List[str] = field(default_factory=list)
    category_id: Optional[str] = None
    is_active: bool = True
    usage_count: int = 0
    success_rate: float = 0.0
    position: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class Inquiry:
    """
    Incoming support message.

    Starts pending and leaves that state at most once, either to
    responded (template attached) or escalated.
    """
    id: Optional[str]
    message: str
    sender_name: str
    sender_email: Optional[str] = None
    category_id: Optional[str] = None
    response_template_id: Optional[str] = None
    response_message: Optional[str] = None
    confidence: Optional[float] = None
    response_time: Optional[float] = None
    is_automated: bool = False
    satisfaction_score: Optional[float] = None
    status: str = InquiryStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    responded_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == InquiryStatus.PENDING

    def _ensure_pending(self, target: str) -> None:
        if not self.is_pending:
            raise InvalidStatusTransitionException(self.id, self.status, target)

    def respond_with_template(
        self,
        template: ResponseTemplate,
        confidence: float,
        response_time: float
    ) -> None:
        """Attach an automated reply and move to responded."""
        self._ensure_pending(InquiryStatus.RESPONDED)
        self.response_template_id = template.id
        self.response_message = template.content
        self.confidence = confidence
        self.response_time = response_time
        self.is_automated = True
        self.status = InquiryStatus.RESPONDED
        self.responded_at = _utcnow()

    def escalate(self) -> None:
        """Hand the inquiry to a human agent."""
        self._ensure_pending(InquiryStatus.ESCALATED)
        self.status = InquiryStatus.ESCALATED
