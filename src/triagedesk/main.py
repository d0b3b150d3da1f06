"""
Triage Desk - Main Application
==============================

Support inquiry triage dashboard.

Modules:
- Matching: Keyword-weighted template matching, categorization, similarity
- Helpdesk: Categories, response templates and inquiries with automated replies
- Analytics: Dashboard metrics, trends and daily snapshots

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects and the matching engine
- Infrastructure: Database, rules file watcher, scheduler, metrics export
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from triagedesk.config import settings
from triagedesk.core import ApplicationException

# Infrastructure
from triagedesk.infrastructure.database import (
    init_database, close_database, create_tables, get_session_context
)

# Matching Module
from triagedesk.matching.application import MatchingService
from triagedesk.matching.infrastructure import MatchingRulesManager

# Helpdesk Module (models are imported so create_tables sees them)
from triagedesk.helpdesk.infrastructure import seed_default_data
from triagedesk.helpdesk.interfaces import (
    categories_router, templates_router, inquiries_router
)

# Analytics Module
from triagedesk.analytics.application import AnalyticsService
from triagedesk.analytics.infrastructure import (
    AnalyticsScheduler, SQLAlchemyAnalyticsRepository
)
from triagedesk.analytics.interfaces import analytics_router

# Logging / Metrics
from triagedesk.shared.infrastructure.logging import setup_logging, get_logger
from triagedesk.shared.infrastructure.grafana import init_grafana_exporter
from triagedesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    MetricsMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler
)

logger = get_logger(__name__)


async def analytics_snapshot_job() -> None:
    """Background job: roll up today's inquiries."""
    async with get_session_context() as session:
        await AnalyticsService(SQLAlchemyAnalyticsRepository(session)).capture_snapshot()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database and create tables
    3. Seed default categories and templates (empty database only)
    4. Load matching rules and watch the rules file
    5. Start analytics scheduler
    6. Initialize Grafana exporter

    SHUTDOWN:
    1. Stop analytics scheduler
    2. Stop rules file watcher
    3. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Triage Desk", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Initializing database")
    init_database()
    await create_tables()

    if settings.seed_default_data:
        async with get_session_context() as session:
            await seed_default_data(session)

    logger.info("Loading matching rules")
    rules_manager = MatchingRulesManager()
    rules_manager.load(settings.matching_rules_path)
    rules_manager.start_watching()

    scheduler: Optional[AnalyticsScheduler] = None
    if settings.analytics_snapshot_interval > 0:
        scheduler = AnalyticsScheduler(interval_seconds=settings.analytics_snapshot_interval)
        await scheduler.start(analytics_snapshot_job)
    else:
        logger.info("Analytics scheduler disabled")

    if settings.grafana_host and settings.grafana_api_key and settings.grafana_instance_id:
        init_grafana_exporter(
            host=settings.grafana_host,
            api_key=settings.grafana_api_key,
            instance_id=settings.grafana_instance_id
        )
    else:
        logger.info("Grafana OTLP exporter not configured - metrics will not be exported")

    # Store services in app state for dependency injection
    app.state.settings = settings
    app.state.rules_manager = rules_manager
    app.state.matching_service = MatchingService(rules_manager)
    app.state.analytics_scheduler = scheduler

    logger.info("Triage Desk started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Triage Desk")

    if scheduler:
        await scheduler.stop()

    rules_manager.stop_watching()

    await close_database()

    logger.info("Triage Desk shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Triage Desk API",
    description="""
    ## Support Inquiry Triage Dashboard

    Incoming inquiries are categorized and, when a response template matches
    well enough, answered automatically.

    ---

    ### Helpdesk

    - `GET/POST/PUT/DELETE /api/categories` - Manage categories
    - `GET/POST/PUT/DELETE /api/response-templates` - Manage response templates
    - `POST /api/inquiries` - Submit an inquiry (categorize + auto-respond)
    - `POST /api/inquiries/analyze` - Preview keywords, category and match
    - `PUT /api/inquiries/{id}/satisfaction` - Rate a response (1-5)
    - `POST /api/inquiries/{id}/escalate` - Hand over to a human agent

    ### Analytics

    - `GET /api/analytics/dashboard` - Totals, averages, automation rate
    - `GET /api/analytics/trends` - Daily volume
    - `GET /api/analytics/categories` - Category distribution
    - `GET/POST /api/analytics/snapshots` - Daily snapshots

    ---

    ### Matching

    | Signal | Weight | Condition |
    |--------|--------|-----------|
    | Template keyword | 3 | Substring of the message |
    | Title word | 2 | Longer than 3 characters |
    | Content word | 1 | Longer than 4 characters |

    Confidence = score / words in message (capped at 1). A template must
    reach 0.3 confidence to be used; ties go to the earlier template.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(categories_router)
app.include_router(templates_router)
app.include_router(inquiries_router)
app.include_router(analytics_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "database": "connected",
                        "matching_rules": "loaded (watching)",
                        "analytics_scheduler": "running"
                    }
                }
            }
        }
    }
})
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Returns service health status including:
    - Matching rules status
    - Scheduler state
    """
    rules_manager = getattr(request.app.state, "rules_manager", None)
    scheduler = getattr(request.app.state, "analytics_scheduler", None)

    if rules_manager is None:
        rules_state = "not_loaded"
    else:
        rules_state = "loaded (watching)" if rules_manager.is_watching else "loaded"

    checks = {
        "database": "connected",
        "matching_rules": rules_state,
        "analytics_scheduler": "running" if scheduler and scheduler.is_running else "stopped"
    }

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Triage Desk",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "helpdesk": {
                "prefix": "/api",
                "endpoints": [
                    "GET /api/categories - List categories",
                    "GET /api/response-templates - List or search templates",
                    "POST /api/inquiries - Submit inquiry",
                    "POST /api/inquiries/analyze - Analyze message"
                ]
            },
            "analytics": {
                "prefix": "/api/analytics",
                "endpoints": [
                    "GET /api/analytics/dashboard - Dashboard metrics",
                    "GET /api/analytics/trends - Daily trends",
                    "GET /api/analytics/categories - Category distribution",
                    "GET /api/analytics/snapshots - Stored snapshots"
                ]
            }
        }
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "triagedesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
