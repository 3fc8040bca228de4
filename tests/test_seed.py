"""
Tests for the demo data loader.
"""

from pathlib import Path

import pytest
from sqlalchemy import select

from app.core.security import verify_password
from app.db.seed import DEMO_USER_EMAIL, DEMO_USER_PASSWORD, load_seed_file, seed_database
from app.models.task import Task
from app.models.user import User

SEED_FILE = Path(__file__).resolve().parents[1] / "app" / "data" / "seed-data.json"

pytestmark = pytest.mark.db


def test_bundled_seed_file_parses():
    data = load_seed_file(SEED_FILE)
    assert data is not None
    assert len(data.tasks) == 7
    assert sum(1 for t in data.tasks if t.deleted_at is not None) == 1


@pytest.mark.asyncio
async def test_seed_creates_demo_user_and_tasks(db_session):
    inserted = await seed_database(db_session, SEED_FILE)
    await db_session.commit()

    assert inserted == 7

    user = (await db_session.execute(select(User))).scalar_one()
    assert user.email == DEMO_USER_EMAIL
    assert verify_password(DEMO_USER_PASSWORD, user.password_hash)

    tasks = (await db_session.execute(select(Task))).scalars().all()
    assert len(tasks) == 7
    assert all(t.owner_user_id == user.id for t in tasks)


@pytest.mark.asyncio
async def test_seed_is_skipped_when_data_exists(db_session):
    assert await seed_database(db_session, SEED_FILE) == 7
    await db_session.commit()

    assert await seed_database(db_session, SEED_FILE) == 0
    count = len((await db_session.execute(select(Task))).scalars().all())
    assert count == 7


@pytest.mark.asyncio
async def test_missing_seed_file_inserts_no_tasks(db_session, tmp_path):
    assert await seed_database(db_session, tmp_path / "absent.json") == 0
    assert (await db_session.execute(select(Task))).first() is None
