"""
loris.api.routers.dataquery

AJAX endpoints of the data query tool.

Responsibilities:
- Data dictionary lookup by category (key range) or by explicit keys.
- Category listing.
- Translate CouchDB failures into 502 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_502_BAD_GATEWAY

from loris.api.deps import couchdb_client, settings_dep
from loris.auth.deps import require_permissions
from loris.couchdb.client import CouchDBClient, CouchDBError
from loris.modules.dataquery.datadictionary import (
    DataDictionaryService,
    InvalidKeysError,
    parse_keys,
)
from loris.modules.dataquery.module import DATAQUERY_VIEW_PERMISSION
from loris.settings import Settings

router = APIRouter(
    tags=["dataquery"],
    dependencies=[Depends(require_permissions(DATAQUERY_VIEW_PERMISSION))],
)


def _service(
    couch: CouchDBClient = Depends(couchdb_client),
    settings: Settings = Depends(settings_dep),
) -> DataDictionaryService:
    return DataDictionaryService(couch=couch, design_doc=settings.dataquery_design_doc)


@router.get("/dataquery/ajax/datadictionary")
# Legacy URL still used by older DQT front-end bundles.
@router.get("/dqt/ajax/datadictionary.php", include_in_schema=False)
async def datadictionary(
    category: str | None = None,
    keys: str | None = None,
    service: DataDictionaryService = Depends(_service),
) -> list[Any]:
    try:
        if category:
            return await service.by_category(category)
        if keys:
            return await service.by_keys(parse_keys(keys))
    except InvalidKeysError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except CouchDBError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    return []


@router.get("/dataquery/ajax/categories")
async def categories(
    service: DataDictionaryService = Depends(_service),
) -> list[dict[str, Any]]:
    try:
        return await service.categories()
    except CouchDBError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(e)) from e
