"""Seed the starter plans into the configured database and print table row counts.

Run after `alembic upgrade head`:  python scripts/seed_default_plans.py [--force]
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import gym_tracker
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import text

from gym_tracker.core.config import get_settings
from gym_tracker.db.session import async_session_maker, engine
from gym_tracker.services.catalog import load_default_plans
from gym_tracker.services.repository import GymRepository

TABLES = ["workouts", "workout_exercises", "workout_sets", "plans", "plan_exercises", "machine_defaults"]


async def main(force: bool = False):
    settings = get_settings()
    print(f"Connecting to {'SQLite' if settings.uses_sqlite else 'PostgreSQL'} database...")

    async with async_session_maker() as session:
        repo = GymRepository(session)
        existing = await repo.count_plans()
        if existing and not force:
            print(f"{existing} plans already stored; use --force to add the defaults anyway.")
        else:
            plans = load_default_plans(settings.default_plans_path)
            await repo.seed_plans(plans)
            await session.commit()
            print(f"Seeded {len(plans)} plans: {', '.join(p.name for p in plans)}")

        for table in TABLES:
            result = await session.execute(text(f"SELECT count(*) FROM {table}"))
            print(f"Table '{table}' row count: {result.scalar()}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(force="--force" in sys.argv[1:]))
