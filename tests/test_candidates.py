"""
tests.test_candidates

Candidate endpoints: site-scoped listing and lookup, and registration checks.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from loris.db.repositories.candidates import CandidateRepo
from loris.db.repositories.sites import SiteRepo
from loris.study_entities.site_haver import CenterID


async def _seed(app: FastAPI) -> None:
    async with app.state.sessionmaker() as session:
        sites = SiteRepo(session)
        mtl = await sites.create(name="Montreal", alias="MTL")
        ott = await sites.create(name="Ottawa", alias="OTT")
        cands = CandidateRepo(session)
        await cands.create(cand_id=300001, pscid="MTL0001", center_id=CenterID(mtl.center_id))
        await cands.create(cand_id=300002, pscid="OTT0001", center_id=CenterID(ott.center_id))
        await session.commit()


@pytest.mark.asyncio
async def test_list_is_scoped_to_user_sites(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    headers = await auth(sites=[1])
    r = await client.get("/v1/candidates", headers=headers)
    assert r.status_code == 200
    assert [c["pscid"] for c in r.json()] == ["MTL0001"]
    assert r.json()[0]["site"] == "Montreal"


@pytest.mark.asyncio
async def test_all_sites_permission_lists_everything(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    headers = await auth(permissions=["access_all_profiles"])
    r = await client.get("/v1/candidates", headers=headers)
    assert [c["pscid"] for c in r.json()] == ["MTL0001", "OTT0001"]


@pytest.mark.asyncio
async def test_other_site_candidate_is_hidden(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    headers = await auth(sites=[1])
    assert (await client.get("/v1/candidates/300001", headers=headers)).status_code == 200
    assert (await client.get("/v1/candidates/300002", headers=headers)).status_code == 404
    assert (await client.get("/v1/candidates/399999", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_create_candidate(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    body = {"cand_id": 300003, "pscid": "MTL0002", "center_id": 1, "sex": "Female"}

    headers = await auth(sites=[1])
    assert (await client.post("/v1/candidates", json=body, headers=headers)).status_code == 403

    headers = await auth(permissions=["candidate_create"], sites=[2])
    assert (await client.post("/v1/candidates", json=body, headers=headers)).status_code == 403

    headers = await auth(permissions=["candidate_create"], sites=[1])
    r = await client.post("/v1/candidates", json=body, headers=headers)
    assert r.status_code == 201
    assert r.json()["sex"] == "Female"
    assert r.json()["center_id"] == 1

    r = await client.post("/v1/candidates", json=body, headers=headers)
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_create_candidate_at_unknown_site(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    headers = await auth(permissions=["candidate_create"], sites=[7])
    body = {"cand_id": 300003, "pscid": "XXX0001", "center_id": 7}
    assert (await client.post("/v1/candidates", json=body, headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_create_candidate_without_site_affiliation(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    body = {"cand_id": 300003, "pscid": "MTL0002", "center_id": 1}

    headers = await auth(permissions=["candidate_create"])
    r = await client.post("/v1/candidates", json=body, headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Not affiliated with site"

    # The all-sites permission stands in for an affiliation.
    headers = await auth(permissions=["candidate_create", "access_all_profiles"])
    r = await client.post("/v1/candidates", json=body, headers=headers)
    assert r.status_code == 201
    assert r.json()["site"] == "Montreal"


@pytest.mark.asyncio
async def test_all_sites_permission_alone_cannot_create(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    headers = await auth(permissions=["access_all_profiles"])
    body = {"cand_id": 300003, "pscid": "MTL0002", "center_id": 1}
    assert (await client.post("/v1/candidates", json=body, headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_create_candidate_with_taken_pscid(app: FastAPI, client: httpx.AsyncClient, auth) -> None:
    await _seed(app)
    headers = await auth(permissions=["candidate_create"], sites=[1])
    body = {"cand_id": 300009, "pscid": "MTL0001", "center_id": 1}
    r = await client.post("/v1/candidates", json=body, headers=headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "PSCID already in use"


@pytest.mark.asyncio
async def test_repo_finds_candidate_by_pscid(app: FastAPI) -> None:
    await _seed(app)
    async with app.state.sessionmaker() as session:
        repo = CandidateRepo(session)
        cand = await repo.get_by_pscid("OTT0001")
        assert cand is not None
        assert cand.cand_id == 300002
        assert await repo.get_by_pscid("NOPE0001") is None
