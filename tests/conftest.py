"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file and an in-memory
CouchDB stand-in served through `httpx.MockTransport`.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from loris.api.app import create_app
from loris.settings import Settings

DICTIONARY: list[dict[str, Any]] = [
    {"id": "d1", "key": ["demographics", "CandID"], "value": {"Type": "varchar(255)", "Description": "DCC Candidate Identifier"}},
    {"id": "d2", "key": ["demographics", "PSCID"], "value": {"Type": "varchar(255)", "Description": "Project Candidate Identifier"}},
    {"id": "d3", "key": ["demographics", "Sex"], "value": {"Type": "enum('Male','Female')", "Description": "Candidate's biological sex"}},
    {"id": "m1", "key": ["mri_data", "Scan_done"], "value": {"Type": "enum('yes','no')", "Description": "Scan done"}},
]

DOCS: dict[str, dict[str, Any]] = {
    "_design/DQG-2.0": {"_id": "_design/DQG-2.0", "_rev": "1-a", "language": "javascript"},
}


class FakeCouch:
    """Serves the DQG-2.0 `datadictionary` and `categories` views from DICTIONARY."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.fail_status: int | None = None
        # Served verbatim (any status) instead of the normal answer.
        self.raw_response: httpx.Response | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"error": "internal_server_error"})
        if self.raw_response is not None:
            return self.raw_response

        path = request.url.path
        params = request.url.params
        if path.endswith("/_design/DQG-2.0/_view/datadictionary"):
            rows = sorted(DICTIONARY, key=lambda r: r["key"])
            if "key" in params:
                wanted = json.loads(params["key"])
                rows = [r for r in rows if r["key"] == wanted]
            elif "startkey" in params:
                start = json.loads(params["startkey"])
                end = json.loads(params["endkey"])
                rows = [r for r in rows if start <= r["key"] <= end]
            return httpx.Response(200, json={"total_rows": len(DICTIONARY), "offset": 0, "rows": rows})
        if path.endswith("/_design/DQG-2.0/_view/categories"):
            counts = Counter(r["key"][0] for r in DICTIONARY)
            return httpx.Response(200, json={"rows": [{"key": k, "value": v} for k, v in sorted(counts.items())]})
        if path.endswith("/loris/"):
            return httpx.Response(200, json={"db_name": "loris", "doc_count": len(DOCS) + len(DICTIONARY)})
        doc_id = unquote(path.removeprefix("/loris/"))
        if doc_id in DOCS:
            return httpx.Response(200, json=DOCS[doc_id])
        return httpx.Response(404, json={"error": "not_found", "reason": "missing"})


@pytest.fixture
def couch() -> FakeCouch:
    return FakeCouch()


@pytest_asyncio.fixture
async def app(tmp_path, couch: FakeCouch) -> AsyncIterator[FastAPI]:
    settings = Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'loris.db'}")
    app = create_app(settings=settings, couchdb_transport=httpx.MockTransport(couch.handler))
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth(client: httpx.AsyncClient):
    """Mint a dev token and return request headers carrying it."""

    async def _headers(
        subject: str = "tester",
        *,
        permissions: list[str] | None = None,
        sites: list[int] | None = None,
    ) -> dict[str, str]:
        r = await client.post(
            "/v1/dev/token",
            json={"subject": subject, "permissions": permissions or [], "sites": sites or []},
        )
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _headers

