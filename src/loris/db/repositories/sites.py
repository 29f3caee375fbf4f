"""
loris.db.repositories.sites

Repository for `Site` (psc) entities.

Responsibilities:
- Register sites.
- Fetch a site by `CenterID` and list sites, optionally limited to a set of centers.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loris.db.models import Site
from loris.study_entities.site_haver import CenterID


class SiteRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self, *, name: str, alias: str, mri_alias: str = "", study_site: bool = True
    ) -> Site:
        site = Site(name=name, alias=alias, mri_alias=mri_alias, study_site=study_site)
        self._session.add(site)
        await self._session.flush()
        return site

    async def get(self, center_id: CenterID) -> Site | None:
        return await self._session.get(Site, int(center_id))

    async def list(self, center_ids: Iterable[CenterID] | None = None) -> list[Site]:
        stmt = select(Site).order_by(Site.name)
        if center_ids is not None:
            stmt = stmt.where(Site.center_id.in_([int(c) for c in center_ids]))
        return list((await self._session.execute(stmt)).scalars().all())
