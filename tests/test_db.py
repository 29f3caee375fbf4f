"""
tests.test_db

Persistence helpers: dev bootstrap seeding, SQLite foreign keys, and constraint names.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from loris.db.init_db import init_db
from loris.db.models import Candidate
from loris.db.repositories.candidates import CandidateRepo
from loris.db.repositories.sites import SiteRepo
from loris.db.session import create_engine, create_sessionmaker
from loris.settings import Settings
from loris.study_entities.site_haver import CenterID


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'loris.db'}"))
    yield engine
    await engine.dispose()


@pytest.mark.asyncio
async def test_init_db_seeds_dcc_once(engine: AsyncEngine) -> None:
    await init_db(engine, seed_sites=True)
    await init_db(engine, seed_sites=True)
    async with create_sessionmaker(engine)() as session:
        sites = await SiteRepo(session).list()
    assert [(s.center_id, s.alias, s.study_site) for s in sites] == [(1, "DCC", False)]


@pytest.mark.asyncio
async def test_init_db_without_seeding(engine: AsyncEngine) -> None:
    await init_db(engine)
    async with create_sessionmaker(engine)() as session:
        assert await SiteRepo(session).list() == []


@pytest.mark.asyncio
async def test_candidate_must_reference_an_existing_site(engine: AsyncEngine) -> None:
    await init_db(engine)
    async with create_sessionmaker(engine)() as session:
        with pytest.raises(IntegrityError):
            await CandidateRepo(session).create(cand_id=300010, pscid="GHOST01", center_id=CenterID(42))


def test_constraints_have_conventional_names() -> None:
    names = {c.name for c in Candidate.__table__.constraints}
    assert {"pk_candidate", "uq_candidate_pscid"} <= names
