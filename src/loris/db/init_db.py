"""
loris.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Seed the Data Coordinating Center site on an empty dev database.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from loris.db.base import Base
from loris.db.models import Site

# Every LORIS install starts with the DCC as CenterID 1; it is not a study site.
DCC_SITE = {"name": "Data Coordinating Center", "alias": "DCC", "mri_alias": "DCC", "study_site": False}


async def init_db(engine: AsyncEngine, *, seed_sites: bool = False) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if seed_sites and (await conn.execute(select(Site.center_id).limit(1))).first() is None:
            await conn.execute(insert(Site).values(**DCC_SITE))
