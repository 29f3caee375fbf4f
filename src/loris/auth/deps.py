"""
loris.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `User`.
- Enforce permission codes via reusable dependency factories.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from loris.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from loris.auth.models import User
from loris.api.deps import settings_dep
from loris.settings import Settings
from loris.study_entities.site_haver import CenterID

_bearer = HTTPBearer(auto_error=False)


def get_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> User:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    username = str(payload.get("sub", ""))
    perms_raw = payload.get("perms", [])
    sites_raw = payload.get("sites", [])
    if not username:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(perms_raw, list) or not isinstance(sites_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token claims")

    try:
        center_ids = frozenset(CenterID(int(s)) for s in sites_raw)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token sites") from e

    structlog.contextvars.bind_contextvars(user=username)
    # Read back by the request middleware for its summary line.
    request.state.user = username
    return User(
        username=username,
        permissions=frozenset(str(p) for p in perms_raw),
        center_ids=center_ids,
    )


def require_permissions(*required: str):
    """
    Dependency factory: the caller needs at least one of `required`
    (superuser always passes).
    """

    def _dep(user: User = Depends(get_user)) -> User:
        if not user.has_any_permission(*required):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Permission denied")
        return user

    return _dep
