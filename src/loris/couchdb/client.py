"""
loris.couchdb.client

HTTP client boundary for the CouchDB document store.

Responsibilities:
- Build the shared `httpx.AsyncClient` (base URL, basic auth, timeout) from settings.
- Query design-document views with correctly JSON-encoded key parameters.
- Fetch single documents.
- Translate transport/status failures and malformed bodies into `CouchDBError`.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from loris.observability.logging import get_logger
from loris.settings import Settings

log = get_logger(__name__)

# View parameters whose values CouchDB expects as JSON documents.
_JSON_PARAMS = frozenset({"key", "keys", "startkey", "endkey", "start_key", "end_key"})


class CouchDBError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def create_http_client(
    settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.couchdb_url,
        auth=httpx.BasicAuth(settings.couchdb_admin, settings.couchdb_adminpass),
        timeout=settings.couchdb_timeout_seconds,
        headers={"Accept": "application/json"},
        transport=transport,
    )


def encode_view_params(params: dict[str, Any]) -> dict[str, str]:
    encoded: dict[str, str] = {}
    for name, value in params.items():
        if isinstance(value, bool):
            encoded[name] = "true" if value else "false"
        elif name in _JSON_PARAMS:
            # Strings are passed through so pre-encoded keys (e.g. '["a","b"]') still work.
            encoded[name] = value if isinstance(value, str) else json.dumps(value)
        else:
            encoded[name] = str(value)
    return encoded


class CouchDBClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        try:
            r = await self._http.get(path, params=params)
        except httpx.HTTPError as e:
            log.error("couchdb_unreachable", path=path, error=str(e))
            raise CouchDBError(f"CouchDB request failed: {e}") from e
        return r

    def _json_object(self, r: httpx.Response, what: str) -> dict[str, Any]:
        try:
            body = r.json()
        except ValueError as e:
            log.warning("couchdb_bad_body", what=what, status=r.status_code)
            raise CouchDBError(f"{what} returned a non-JSON body", status_code=r.status_code) from e
        if not isinstance(body, dict):
            log.warning("couchdb_bad_body", what=what, status=r.status_code)
            raise CouchDBError(f"{what} returned a non-object body", status_code=r.status_code)
        return body

    async def query_view(
        self, design_doc: str, view: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Query `_design/<design_doc>/_view/<view>` and return its `rows`.
        """

        what = f"view {design_doc}/{view}"
        path = f"_design/{quote(design_doc, safe='')}/_view/{quote(view, safe='')}"
        r = await self._get(path, encode_view_params(params or {}))
        if r.status_code != 200:
            log.warning("couchdb_view_error", design_doc=design_doc, view=view, status=r.status_code)
            raise CouchDBError(f"{what} failed with HTTP {r.status_code}", status_code=r.status_code)
        rows = self._json_object(r, what).get("rows")
        if not isinstance(rows, list):
            raise CouchDBError(f"{what} returned no rows list", status_code=r.status_code)
        return rows

    async def get_doc(self, doc_id: str) -> dict[str, Any] | None:
        r = await self._get(quote(doc_id, safe=""))
        if r.status_code == 404:
            return None
        if r.status_code != 200:
            raise CouchDBError(f"document fetch failed with HTTP {r.status_code}", status_code=r.status_code)
        return self._json_object(r, f"document {doc_id}")

    async def info(self) -> dict[str, Any]:
        """Database info document (`GET /<db>/`); used as the readiness check."""

        r = await self._get("")
        if r.status_code != 200:
            raise CouchDBError(f"database info failed with HTTP {r.status_code}", status_code=r.status_code)
        return self._json_object(r, "database info")


# --- Module Notes -----------------------------------------------------------
# The client is created once at startup (see `api.app.create_app`) and shared
# across requests; tests inject an `httpx.MockTransport` instead of a live server.
