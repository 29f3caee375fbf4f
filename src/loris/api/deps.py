"""
loris.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions, the LORIS instance,
  and the CouchDB client.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from loris.couchdb.client import CouchDBClient
from loris.instance import LorisInstance
from loris.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # Apps built by `create_app` carry their own settings; fall back to the env-driven ones.
    return getattr(request.app.state, "settings", None) or get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on app startup in `loris.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is explicit in the routers.
    async with session_factory() as session:
        yield session


def loris_instance(request: Request) -> LorisInstance:
    return request.app.state.loris  # type: ignore[attr-defined]


def couchdb_client(loris: LorisInstance = Depends(loris_instance)) -> CouchDBClient:
    if loris.couchdb is None:
        raise RuntimeError("CouchDB client not initialized")
    return loris.couchdb
