"""Shared fixtures: bundled catalog, record builders, temporary SQLite database."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from gym_tracker.core.config import get_settings
from gym_tracker.db.base import Base
from gym_tracker.db.session import build_session_maker, get_db
from gym_tracker.models import *  # noqa: F401, F403 - register all models
from gym_tracker.schemas.workout import Exercise, SetRecord, Workout
from gym_tracker.services.catalog import load_catalog

START = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


def make_set(weight=100.0, reps=5, completed=True, **kwargs) -> SetRecord:
    return SetRecord(weight=weight, reps=reps, is_completed=completed, **kwargs)


def make_exercise(machine_id="bench-press", sets=(), name=None, **kwargs) -> Exercise:
    return Exercise(machine_id=machine_id, machine_name=name or machine_id, sets=list(sets), **kwargs)


def make_workout(exercises=(), date="2025-03-01", start=START, minutes=None, **kwargs) -> Workout:
    end = start + timedelta(minutes=minutes) if minutes is not None else None
    return Workout(date=date, start_time=start, end_time=end, exercises=list(exercises), **kwargs)


@pytest.fixture(scope="session")
def catalog():
    return load_catalog(get_settings().catalog_path)


def _sqlite_engine(path):
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


async def _create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def db_session(tmp_path):
    engine = _sqlite_engine(tmp_path / "test.db")
    await _create_tables(engine)
    async with build_session_maker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def client(tmp_path):
    from gym_tracker.main import app

    engine = _sqlite_engine(tmp_path / "api.db")
    asyncio.run(_create_tables(engine))
    session_maker = build_session_maker(engine)

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())
