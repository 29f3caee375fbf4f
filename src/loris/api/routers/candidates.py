"""
loris.api.routers.candidates

Candidate endpoints scoped by site affiliation.

Responsibilities:
- List candidates visible to the caller.
- Fetch a single candidate (inaccessible candidates look like missing ones).
- Register a candidate at one of the caller's sites.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from loris.api.deps import db_session, settings_dep
from loris.auth.deps import get_user, require_permissions
from loris.auth.models import User
from loris.db.models import Candidate, Sex
from loris.db.repositories.candidates import CandidateRepo
from loris.db.repositories.sites import SiteRepo
from loris.observability.logging import get_logger
from loris.settings import Settings
from loris.study_entities.site_haver import CenterID, is_accessible_by

log = get_logger(__name__)

router = APIRouter(prefix="/v1/candidates", tags=["candidates"])


class CandidateResponse(BaseModel):
    cand_id: int
    pscid: str
    center_id: int
    site: str | None
    sex: str | None
    date_of_birth: date | None
    active: bool


class CandidateCreateRequest(BaseModel):
    cand_id: int = Field(ge=100000, le=999999)
    pscid: str = Field(min_length=1, max_length=255)
    center_id: int = Field(ge=1)
    sex: Sex | None = None
    date_of_birth: date | None = None


def _to_response(cand: Candidate, site_name: str | None) -> CandidateResponse:
    return CandidateResponse(
        cand_id=cand.cand_id,
        pscid=cand.pscid,
        center_id=cand.registration_center_id,
        site=site_name,
        sex=cand.sex.value if cand.sex is not None else None,
        date_of_birth=cand.date_of_birth,
        active=cand.active,
    )


@router.get("", response_model=list[CandidateResponse])
async def list_candidates(
    user: User = Depends(get_user),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[CandidateResponse]:
    all_sites = user.has_permission(settings.all_sites_permission)
    cands = await CandidateRepo(session).list(center_ids=None if all_sites else user.center_ids)
    sites = {s.center_id: s.name for s in await SiteRepo(session).list()}
    return [_to_response(c, sites.get(c.registration_center_id)) for c in cands]


@router.get("/{cand_id}", response_model=CandidateResponse)
async def get_candidate(
    cand_id: int,
    user: User = Depends(get_user),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> CandidateResponse:
    cand = await CandidateRepo(session).get(cand_id)
    if cand is None or not is_accessible_by(
        cand, user, all_sites_permission=settings.all_sites_permission
    ):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Candidate not found")
    site = await SiteRepo(session).get(cand.get_center_id())
    return _to_response(cand, site.name if site else None)


@router.post(
    "",
    response_model=CandidateResponse,
    status_code=HTTP_201_CREATED,
)
async def create_candidate(
    body: CandidateCreateRequest,
    user: User = Depends(require_permissions("candidate_create")),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> CandidateResponse:
    center_id = CenterID(body.center_id)
    if not (user.has_center(center_id) or user.has_permission(settings.all_sites_permission)):
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Not affiliated with site")

    site = await SiteRepo(session).get(center_id)
    if site is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Site not found")

    repo = CandidateRepo(session)
    if await repo.get_by_pscid(body.pscid) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="PSCID already in use")

    try:
        cand = await repo.create(
            cand_id=body.cand_id,
            pscid=body.pscid,
            center_id=center_id,
            sex=body.sex,
            date_of_birth=body.date_of_birth,
        )
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Candidate already exists") from e

    log.info("candidate_created", cand_id=cand.cand_id, center_id=int(center_id))
    return _to_response(cand, site.name)
