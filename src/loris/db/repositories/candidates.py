"""
loris.db.repositories.candidates

Repository for `Candidate` entities.

Responsibilities:
- Register candidates at a site.
- Fetch candidates by CandID/PSCID and list them scoped to a set of sites.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loris.db.models import Candidate, Sex
from loris.study_entities.site_haver import CenterID


class CandidateRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        cand_id: int,
        pscid: str,
        center_id: CenterID,
        sex: Sex | None = None,
        date_of_birth: date | None = None,
    ) -> Candidate:
        cand = Candidate(
            cand_id=cand_id,
            pscid=pscid,
            registration_center_id=int(center_id),
            sex=sex,
            date_of_birth=date_of_birth,
            active=True,
        )
        self._session.add(cand)
        await self._session.flush()
        return cand

    async def get(self, cand_id: int) -> Candidate | None:
        return await self._session.get(Candidate, cand_id)

    async def get_by_pscid(self, pscid: str) -> Candidate | None:
        stmt = select(Candidate).where(Candidate.pscid == pscid)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(
        self,
        *,
        center_ids: Iterable[CenterID] | None = None,
        active_only: bool = True,
        limit: int = 500,
    ) -> list[Candidate]:
        # center_ids=None means "all sites"; an empty iterable yields nothing.
        stmt = select(Candidate).order_by(Candidate.pscid).limit(limit)
        if center_ids is not None:
            stmt = stmt.where(Candidate.registration_center_id.in_([int(c) for c in center_ids]))
        if active_only:
            stmt = stmt.where(Candidate.active.is_(True))
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# Per-entity access checks still go through `is_accessible_by`; the site filter
# here only keeps list queries from loading rows the caller can't see.
