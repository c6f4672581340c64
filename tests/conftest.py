"""Shared test fixtures."""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mtb_fantasy.config import Settings
from mtb_fantasy.database import Base
from mtb_fantasy.models import Race, Rider, Season, Team, User
from mtb_fantasy.services import LockService, ResultImportService

from tests.fixtures.factories import (
    FEMALE_RESULTS,
    MALE_RESULTS,
    create_import_request,
    create_member,
    create_race,
    create_rider,
    create_season,
    create_team,
    create_user,
    utc,
)


@pytest.fixture
async def db_engine():
    """Create in-memory SQLite engine for tests.

    StaticPool keeps one connection so separate sessions see the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create async session with transaction rollback."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def settings() -> Settings:
    """Default game rules, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
async def test_season(db_session: AsyncSession) -> Season:
    season = create_season()
    db_session.add(season)
    await db_session.flush()
    return season


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    user = create_user()
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def test_riders(db_session: AsyncSession) -> dict[str, Rider]:
    """Four men, two women and a female bench rider at 100k each."""
    riders = {
        uci_id: create_rider(uci_id, gender=gender)
        for uci_id, gender in [
            ("m1", "male"),
            ("m2", "male"),
            ("m3", "male"),
            ("m4", "male"),
            ("f1", "female"),
            ("f2", "female"),
            ("b1", "female"),
        ]
    }
    db_session.add_all(riders.values())
    await db_session.flush()
    return riders


@pytest.fixture
async def test_team(
    db_session: AsyncSession,
    test_season: Season,
    test_user: User,
    test_riders: dict[str, Rider],
) -> Team:
    """Elite team with six starters in slot order and b1 on the bench."""
    team = create_team(test_season.id, test_user.id)
    db_session.add(team)
    await db_session.flush()

    for index, uci_id in enumerate(["m1", "m2", "m3", "m4", "f1", "f2"]):
        db_session.add(create_member(team.id, test_riders[uci_id], starter_index=index))
    db_session.add(create_member(team.id, test_riders["b1"]))
    await db_session.flush()
    return team


@pytest.fixture
async def test_race(db_session: AsyncSession, test_season: Season) -> Race:
    """Race whose lock time has passed."""
    race = create_race(test_season.id, lock_at=utc(2024, 5, 2, 12))
    db_session.add(race)
    await db_session.flush()
    return race


@pytest.fixture
async def locked_race(
    db_session: AsyncSession, settings: Settings, test_race: Race, test_team: Team
) -> Race:
    await LockService(db_session, settings).lock_race(test_race.id)
    return test_race


@pytest.fixture
async def final_race(db_session: AsyncSession, settings: Settings, locked_race: Race) -> Race:
    """Locked race with final men and women elite results."""
    service = ResultImportService(db_session, settings)
    await service.upsert_race_results(locked_race.id, create_import_request("male", MALE_RESULTS))
    await service.upsert_race_results(
        locked_race.id, create_import_request("female", FEMALE_RESULTS)
    )
    return locked_race
