"""
Content Hub - Maintenance Script Tests
"""
from contextlib import asynccontextmanager

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contenthub.models.user import User
from contenthub.scripts import create_admin, seed_curriculum
from contenthub.services.curriculum import CurriculumService
from contenthub.services.curriculum_tree import Level


@pytest.fixture
def script_db(monkeypatch, db_session: AsyncSession):
    """Point a script module at the test session."""

    @asynccontextmanager
    async def _session():
        yield db_session

    async def _init_db():
        return None

    def _patch(module):
        monkeypatch.setattr(module, "async_session_maker", _session)
        monkeypatch.setattr(module, "init_db", _init_db)

    return _patch


@pytest.mark.asyncio
async def test_create_admin(script_db, db_session: AsyncSession):
    script_db(create_admin)

    await create_admin.create_admin("root@example.com", "Root", "RootPass123")

    result = await db_session.execute(select(User).where(User.email == "root@example.com"))
    user = result.scalar_one()
    assert user.role_value == "admin"
    assert user.is_approved and user.is_active


@pytest.mark.asyncio
async def test_create_admin_promotes_existing(script_db, make_user, db_session: AsyncSession):
    script_db(create_admin)
    existing = await make_user("someone@example.com", is_approved=False)

    await create_admin.create_admin("someone@example.com", "Ignored", "RootPass123")

    await db_session.refresh(existing)
    assert existing.role_value == "admin"
    assert existing.full_name == "Test User"


@pytest.mark.asyncio
async def test_seed_reset_restores_default(script_db, db_session: AsyncSession):
    script_db(seed_curriculum)
    service = CurriculumService(db_session)
    await service.add_node(Level.CLASS, [], "Class 11")

    await seed_curriculum.seed_curriculum(reset=True)

    stored = await service.get_tree()
    assert list(stored.tree) == ["Class 9", "Class 10"]
