"""
tests.test_dataquery_page

Data query tool page: module routing, access checks, and the rendered stepper.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_dataquery_page_renders_stepper_and_categories(client: httpx.AsyncClient, auth) -> None:
    headers = await auth(permissions=["dataquery_view"])
    r = await client.get("/dataquery", headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    html = r.text
    assert "Data Query Tool" in html
    assert "stepperContainer" in html
    assert "Define Filters" in html
    assert 'value="demographics"' in html
    assert "demographics (3)" in html
    assert "/dataquery/js/index.js" in html
    # Loaded successfully, so the progress bar is hidden.
    assert "progressBar" not in html


@pytest.mark.asyncio
async def test_dataquery_page_reports_couchdb_outage(client: httpx.AsyncClient, auth, couch) -> None:
    couch.fail_status = 503
    headers = await auth(permissions=["dataquery_view"])
    r = await client.get("/dataquery/dataquery", headers=headers)
    assert r.status_code == 200
    assert "Unable to load the data dictionary" in r.text


@pytest.mark.asyncio
async def test_dataquery_page_requires_permission(client: httpx.AsyncClient, auth) -> None:
    headers = await auth()
    assert (await client.get("/dataquery", headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_unknown_module_and_page(client: httpx.AsyncClient, auth) -> None:
    headers = await auth(permissions=["superuser"])
    assert (await client.get("/no_such_module", headers=headers)).status_code == 404
    assert (await client.get("/dataquery/no_such_page", headers=headers)).status_code == 404
