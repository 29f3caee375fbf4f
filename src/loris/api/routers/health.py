"""
loris.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): a DB round trip plus a CouchDB database
  info call, answering 503 with the failing backend named.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from loris.api.deps import couchdb_client, db_session
from loris.couchdb.client import CouchDBClient, CouchDBError
from loris.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    couch: CouchDBClient = Depends(couchdb_client),
) -> dict[str, str]:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.warning("not_ready", backend="database", error=str(e))
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="database unavailable") from e

    try:
        await couch.info()
    except CouchDBError as e:
        log.warning("not_ready", backend="couchdb", error=str(e))
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="couchdb unavailable") from e

    return {"status": "ready", "database": "ok", "couchdb": "ok"}
