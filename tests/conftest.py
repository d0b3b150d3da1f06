"""Pytest configuration for Triage Desk tests.

Points the application at a private in-memory SQLite database and turns
off background jobs before anything from triagedesk is imported, since
settings are read once at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["ANALYTICS_SNAPSHOT_INTERVAL"] = "0"
os.environ["MATCHING_RULES_PATH"] = "/nonexistent/triagedesk/matching_rules.yaml"
os.environ["SEED_DEFAULT_DATA"] = "true"
for _key in ("GRAFANA_HOST", "GRAFANA_API_KEY", "GRAFANA_INSTANCE_ID"):
    os.environ.pop(_key, None)

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from tests.helpers import NamedCategory
from triagedesk.infrastructure.database import (
    close_database,
    create_tables,
    get_session_context,
    init_database,
)


@pytest.fixture
def default_categories():
    return [
        NamedCategory(id="cat-tech", name="Technical Support"),
        NamedCategory(id="cat-acad", name="Academic"),
        NamedCategory(id="cat-admin", name="Administrative"),
        NamedCategory(id="cat-general", name="General"),
    ]


# =============================================================================
# API fixtures
# =============================================================================


@pytest.fixture
def app():
    """Get the FastAPI application instance."""
    from triagedesk.main import app as main_app

    return main_app


@pytest.fixture
def client(app):
    """Test client with a fresh seeded database per test."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def categories_by_name(client):
    response = client.get("/api/categories")
    return {c["name"]: c for c in response.json()}


@pytest.fixture
def templates_by_title(client):
    response = client.get("/api/response-templates")
    return {t["title"]: t for t in response.json()}


# =============================================================================
# Database fixtures for service-level tests
# =============================================================================


@pytest_asyncio.fixture
async def session():
    """Session bound to an empty in-memory database."""
    from triagedesk.helpdesk.infrastructure import models as _helpdesk_models  # noqa: F401
    from triagedesk.analytics.infrastructure import models as _analytics_models  # noqa: F401

    init_database("sqlite+aiosqlite:///:memory:")
    await create_tables()
    async with get_session_context() as db_session:
        yield db_session
    await close_database()
