"""
Helpdesk Controllers (API Routes)
=================================

FastAPI routes for categories, response templates and inquiries.

Controllers delegate to application services; domain errors are turned
into HTTP responses by the application exception handler.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from triagedesk.infrastructure.database import get_session
from triagedesk.helpdesk.application import (
    CategoryService, TemplateService, InquiryService,
    CategoryCreateRequest, CategoryUpdateRequest, CategoryResponse,
    TemplateCreateRequest, TemplateUpdateRequest, TemplateResponse,
    InquiryCreateRequest, InquiryResponse, SatisfactionRequest,
    AnalyzeRequest, AnalyzeResponse, MessageResponse,
)
from triagedesk.helpdesk.infrastructure import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyTemplateRepository,
    SQLAlchemyInquiryRepository,
)
from triagedesk.matching.application import MatchingService
from triagedesk.shared.infrastructure.grafana import get_grafana_exporter
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

categories_router = APIRouter(prefix="/api/categories", tags=["Categories"])
templates_router = APIRouter(prefix="/api/response-templates", tags=["Response Templates"])
router = APIRouter(prefix="/api/inquiries", tags=["Inquiries"])


# ========== Example payloads for Swagger ==========

INQUIRY_REQUEST_EXAMPLE = {
    "message": "How do I access the assignment portal?",
    "sender_name": "Jane Student",
    "sender_email": "jane@example.edu"
}

INQUIRY_RESPONSE_EXAMPLE = {
    "id": "6f1c2b9e-2f43-4d6a-9a57-3c1d5e0b8a11",
    "message": "How do I access the assignment portal?",
    "sender_name": "Jane Student",
    "sender_email": "jane@example.edu",
    "category_id": "0b6f7c1e-5d0a-4a8e-8f3b-1f2e3d4c5b6a",
    "response_template_id": "a4d2e8f1-7b3c-4e59-9d10-2c3b4a5d6e7f",
    "response_message": "Hi! I can help you with accessing the assignment portal. Here are the steps: ...",
    "confidence": 1.0,
    "response_time": 0.0042,
    "is_automated": True,
    "satisfaction_score": None,
    "status": "responded",
    "created_at": "2026-01-15T09:30:00Z",
    "responded_at": "2026-01-15T09:30:00Z"
}

ANALYZE_REQUEST_EXAMPLE = {
    "message": "I can't see my grades for the midterm assessment",
    "compare_to": "Where are my grades?"
}

ANALYZE_RESPONSE_EXAMPLE = {
    "keywords": ["grades", "midterm", "assessment"],
    "category_id": "3e9a1c7d-0f2b-4b8e-a6d5-9c8b7a6f5e4d",
    "match": {
        "template_id": "c1b2a3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d",
        "title": "Grade Inquiry Response",
        "confidence": 1.0,
        "score": 11,
        "matched_keywords": ["grade", "grades", "assessment"]
    },
    "similarity": 0.2
}

TEMPLATE_REQUEST_EXAMPLE = {
    "title": "Password Reset",
    "content": "To reset your password, open the login page and choose 'Forgot password'.",
    "keywords": ["password", "reset", "login"],
    "is_active": True
}


# ========== Dependencies ==========

async def get_category_service(
    session: AsyncSession = Depends(get_session)
) -> CategoryService:
    return CategoryService(SQLAlchemyCategoryRepository(session))


async def get_template_service(
    session: AsyncSession = Depends(get_session)
) -> TemplateService:
    return TemplateService(
        SQLAlchemyTemplateRepository(session),
        SQLAlchemyCategoryRepository(session)
    )


def get_matching_service(request: Request) -> MatchingService:
    """Get matching service from app state."""
    service = getattr(request.app.state, "matching_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Matching service not initialized"
        )
    return service


async def get_inquiry_service(
    session: AsyncSession = Depends(get_session),
    matching_service: MatchingService = Depends(get_matching_service)
) -> InquiryService:
    return InquiryService(
        SQLAlchemyInquiryRepository(session),
        SQLAlchemyTemplateRepository(session),
        SQLAlchemyCategoryRepository(session),
        matching_service,
        metrics_exporter=get_grafana_exporter()
    )


# ========== Category Routes ==========

@categories_router.get(
    "",
    response_model=List[CategoryResponse],
    summary="List categories"
)
async def list_categories(service: CategoryService = Depends(get_category_service)):
    return await service.list_categories()


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category"
)
async def create_category(
    payload: CategoryCreateRequest,
    service: CategoryService = Depends(get_category_service)
):
    return await service.create_category(payload)


@categories_router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get a category",
    responses={404: {"description": "Category not found"}}
)
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service)
):
    return await service.get_category(category_id)


@categories_router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    responses={404: {"description": "Category not found"}}
)
async def update_category(
    category_id: str,
    payload: CategoryUpdateRequest,
    service: CategoryService = Depends(get_category_service)
):
    return await service.update_category(category_id, payload)


@categories_router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    summary="Delete a category",
    description="Templates and inquiries in the category keep existing with no category.",
    responses={404: {"description": "Category not found"}}
)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service)
):
    await service.delete_category(category_id)
    return MessageResponse(message="Category deleted successfully")


# ========== Response Template Routes ==========

@templates_router.get(
    "",
    response_model=List[TemplateResponse],
    summary="List, search or filter response templates",
    description="""
    Returns templates in insertion order.

    **Query Parameters**:
    - `search`: Case-insensitive match against title, content and keywords
    - `category_id`: Only templates of this category (ignored when `search` is set)
    """
)
async def list_templates(
    search: Optional[str] = Query(None, description="Text to search for"),
    category_id: Optional[str] = Query(None, description="Filter by category"),
    service: TemplateService = Depends(get_template_service)
):
    return await service.list_templates(search=search, category_id=category_id)


@templates_router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    summary="Get a response template",
    responses={404: {"description": "Response template not found"}}
)
async def get_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service)
):
    return await service.get_template(template_id)


@templates_router.post(
    "",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a response template",
    description="New templates start with `usage_count = 0` and `success_rate = 0`.",
    responses={400: {"description": "Unknown category"}}
)
async def create_template(
    payload: TemplateCreateRequest = Body(..., examples=[TEMPLATE_REQUEST_EXAMPLE]),
    service: TemplateService = Depends(get_template_service)
):
    return await service.create_template(payload)


@templates_router.put(
    "/{template_id}",
    response_model=TemplateResponse,
    summary="Update a response template",
    responses={
        400: {"description": "Unknown category"},
        404: {"description": "Response template not found"}
    }
)
async def update_template(
    template_id: str,
    payload: TemplateUpdateRequest,
    service: TemplateService = Depends(get_template_service)
):
    return await service.update_template(template_id, payload)


@templates_router.delete(
    "/{template_id}",
    response_model=MessageResponse,
    summary="Delete a response template",
    responses={404: {"description": "Response template not found"}}
)
async def delete_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service)
):
    await service.delete_template(template_id)
    return MessageResponse(message="Response template deleted successfully")


# ========== Inquiry Routes ==========

@router.get(
    "",
    response_model=List[InquiryResponse],
    summary="List inquiries, newest first"
)
async def list_inquiries(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of inquiries"),
    service: InquiryService = Depends(get_inquiry_service)
):
    return await service.list_inquiries(limit=limit)


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Analyze a message without storing it",
    description="""
    Runs keyword extraction, categorization and template matching on a
    message and returns what would happen on submission. Nothing is stored
    and no usage counters change.

    If `compare_to` is given, the Jaccard similarity of the two texts is
    included.
    """,
    responses={
        200: {
            "description": "Analysis result",
            "content": {
                "application/json": {
                    "example": ANALYZE_RESPONSE_EXAMPLE
                }
            }
        }
    }
)
async def analyze_message(
    payload: AnalyzeRequest = Body(..., examples=[ANALYZE_REQUEST_EXAMPLE]),
    service: InquiryService = Depends(get_inquiry_service)
):
    return await service.analyze_message(payload)


@router.get(
    "/{inquiry_id}",
    response_model=InquiryResponse,
    summary="Get an inquiry",
    responses={404: {"description": "Inquiry not found"}}
)
async def get_inquiry(
    inquiry_id: str,
    service: InquiryService = Depends(get_inquiry_service)
):
    return await service.get_inquiry(inquiry_id)


@router.post(
    "",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an inquiry",
    description="""
    Stores the inquiry, assigns a category (unless `category_id` is given)
    and answers it automatically when a response template matches.

    - **Matched**: status `responded`, `is_automated = true`, template content
      in `response_message`, template usage count incremented
    - **Not matched**: status `pending`, waiting for a human agent
    """,
    responses={
        201: {
            "description": "Inquiry stored",
            "content": {
                "application/json": {
                    "example": INQUIRY_RESPONSE_EXAMPLE
                }
            }
        },
        400: {"description": "Unknown category"}
    }
)
async def submit_inquiry(
    request: Request,
    payload: InquiryCreateRequest = Body(..., examples=[INQUIRY_REQUEST_EXAMPLE]),
    service: InquiryService = Depends(get_inquiry_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.info(
        "Submitting inquiry",
        extra={
            "correlation_id": correlation_id,
            "message_length": len(payload.message),
            "has_category": payload.category_id is not None
        }
    )

    return await service.submit_inquiry(payload)


@router.put(
    "/{inquiry_id}/satisfaction",
    response_model=InquiryResponse,
    summary="Rate an inquiry",
    responses={
        400: {"description": "Score outside 1-5"},
        404: {"description": "Inquiry not found"}
    }
)
async def rate_inquiry(
    inquiry_id: str,
    payload: SatisfactionRequest,
    service: InquiryService = Depends(get_inquiry_service)
):
    return await service.rate_inquiry(inquiry_id, payload.score)


@router.post(
    "/{inquiry_id}/escalate",
    response_model=InquiryResponse,
    summary="Escalate an inquiry to a human agent",
    responses={
        404: {"description": "Inquiry not found"},
        409: {"description": "Inquiry is no longer pending"}
    }
)
async def escalate_inquiry(
    request: Request,
    inquiry_id: str,
    service: InquiryService = Depends(get_inquiry_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.info("Escalating inquiry", extra={"correlation_id": correlation_id, "inquiry_id": inquiry_id})
    return await service.escalate_inquiry(inquiry_id)


# Export for main.py
inquiries_router = router
