"""Repository and seeding tests against an in-memory database."""

import logging

import pytest

from triagedesk.core import RepositoryException
from triagedesk.helpdesk.application import CategoryCreateRequest, CategoryService
from triagedesk.helpdesk.domain import Category, Inquiry, ResponseTemplate
from triagedesk.helpdesk.infrastructure import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyInquiryRepository,
    SQLAlchemyTemplateRepository,
    seed_default_data,
)


async def test_seed_runs_once(session):
    assert await seed_default_data(session) is True
    assert await seed_default_data(session) is False

    categories = await SQLAlchemyCategoryRepository(session).list()
    templates = await SQLAlchemyTemplateRepository(session).list()
    assert len(categories) == 4
    assert len(templates) == 4


async def test_templates_keep_insertion_order(session):
    repo = SQLAlchemyTemplateRepository(session)
    for title in ("Zulu", "Alpha", "Mike"):
        await repo.create(ResponseTemplate(id=None, title=title, content="text"))

    assert [t.title for t in await repo.list()] == ["Zulu", "Alpha", "Mike"]
    assert [t.position for t in await repo.list()] == [0, 1, 2]


async def test_list_active_skips_inactive(session):
    repo = SQLAlchemyTemplateRepository(session)
    await repo.create(ResponseTemplate(id=None, title="On", content="text"))
    await repo.create(ResponseTemplate(id=None, title="Off", content="text", is_active=False))

    assert [t.title for t in await repo.list_active()] == ["On"]


async def test_increment_usage(session):
    repo = SQLAlchemyTemplateRepository(session)
    template = await repo.create(ResponseTemplate(id=None, title="Counter", content="text", usage_count=5))

    await repo.increment_usage(template.id)
    await repo.increment_usage(template.id)

    assert (await repo.get_by_id(template.id)).usage_count == 7


async def test_increment_usage_of_missing_template(session):
    with pytest.raises(RepositoryException):
        await SQLAlchemyTemplateRepository(session).increment_usage("missing")


async def test_unknown_update_field_is_rejected(session):
    repo = SQLAlchemyCategoryRepository(session)
    category = await repo.create(Category(id=None, name="Library"))

    with pytest.raises(RepositoryException):
        await repo.update(category.id, {"not_a_column": 1})


async def test_deleting_category_detaches_inquiries(session):
    category_repo = SQLAlchemyCategoryRepository(session)
    inquiry_repo = SQLAlchemyInquiryRepository(session)
    category = await category_repo.create(Category(id=None, name="Library"))
    inquiry = await inquiry_repo.create(
        Inquiry(id=None, message="Where are the books?", sender_name="Sam", category_id=category.id)
    )

    assert await category_repo.delete(category.id) is True
    assert await category_repo.delete(category.id) is False
    assert (await inquiry_repo.get_by_id(inquiry.id)).category_id is None


async def test_save_persists_status(session):
    repo = SQLAlchemyInquiryRepository(session)
    inquiry = await repo.create(Inquiry(id=None, message="help", sender_name="Sam"))

    inquiry.escalate()
    await repo.save(inquiry)

    assert (await repo.get_by_id(inquiry.id)).status == "escalated"


async def test_category_creation_is_logged(session, caplog):
    service = CategoryService(SQLAlchemyCategoryRepository(session))

    with caplog.at_level(logging.INFO, logger="triagedesk.helpdesk.application.services"):
        category = await service.create_category(CategoryCreateRequest(name="Library"))

    record = next(r for r in caplog.records if r.getMessage() == "Category created")
    assert record.category_id == category.id
    assert record.category_name == "Library"
