"""Tests for inquiry status transitions."""

import pytest

from triagedesk.config import InquiryStatus
from triagedesk.core import InvalidStatusTransitionException
from triagedesk.helpdesk.domain import Inquiry, ResponseTemplate


@pytest.fixture
def inquiry():
    return Inquiry(id="inq-1", message="How do I reset my password?", sender_name="Ada")


@pytest.fixture
def template():
    return ResponseTemplate(id="tpl-1", title="Password Reset", content="Use the reset link.")


def test_new_inquiry_is_pending(inquiry):
    assert inquiry.status == InquiryStatus.PENDING
    assert inquiry.is_automated is False
    assert inquiry.responded_at is None


def test_respond_with_template(inquiry, template):
    inquiry.respond_with_template(template, confidence=0.75, response_time=0.0123)

    assert inquiry.status == InquiryStatus.RESPONDED
    assert inquiry.response_template_id == "tpl-1"
    assert inquiry.response_message == "Use the reset link."
    assert inquiry.confidence == 0.75
    assert inquiry.response_time == 0.0123
    assert inquiry.is_automated is True
    assert inquiry.responded_at is not None


def test_escalate(inquiry):
    inquiry.escalate()

    assert inquiry.status == InquiryStatus.ESCALATED
    assert inquiry.is_automated is False


def test_responded_inquiry_cannot_be_escalated(inquiry, template):
    inquiry.respond_with_template(template, confidence=1.0, response_time=0.0)

    with pytest.raises(InvalidStatusTransitionException) as exc_info:
        inquiry.escalate()

    assert exc_info.value.current == InquiryStatus.RESPONDED
    assert exc_info.value.target == InquiryStatus.ESCALATED


def test_escalation_happens_once(inquiry, template):
    inquiry.escalate()

    with pytest.raises(InvalidStatusTransitionException):
        inquiry.escalate()
    with pytest.raises(InvalidStatusTransitionException):
        inquiry.respond_with_template(template, confidence=1.0, response_time=0.0)
