"""
loris.api.app

FastAPI app factory for the LORIS portal.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory,
  CouchDB HTTP client, LORIS instance).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from loris import __version__
from loris.api.routers.candidates import router as candidates_router
from loris.api.routers.dataquery import router as dataquery_router
from loris.api.routers.dev_auth import router as dev_auth_router
from loris.api.routers.health import router as health_router
from loris.api.routers.pages import router as pages_router
from loris.couchdb.client import CouchDBClient, create_http_client
from loris.db.init_db import init_db
from loris.db.session import create_engine, create_sessionmaker
from loris.instance import LorisInstance, default_modules
from loris.observability.logging import configure_logging, get_logger
from loris.observability.middleware import RequestContextMiddleware
from loris.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    couchdb_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema changes go through Alembic.
            await init_db(engine, seed_sites=settings.env == "dev")

        couch_http = create_http_client(settings, transport=couchdb_transport)
        app.state.couchdb_http = couch_http
        app.state.loris.couchdb = CouchDBClient(http=couch_http)
        try:
            yield
        finally:
            await couch_http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="LORIS",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.loris = LorisInstance(settings, default_modules())

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(candidates_router)
    app.include_router(dataquery_router)
    # Catch-all module/page routes go last.
    app.include_router(pages_router)

    return app


# --- Module Notes -----------------------------------------------------------
# app composition stays here; page logic lives in page controllers and
# data access in repositories / the CouchDB client.
