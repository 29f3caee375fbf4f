"""
loris.api.routers.pages

Server-rendered module pages.

Responsibilities:
- Resolve `/{module}` and `/{module}/{page}` to a page controller.
- Enforce module- and page-level access.
- Run the page's setup hook and return its rendered HTML.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from starlette.status import HTTP_403_FORBIDDEN, HTTP_404_NOT_FOUND

from loris.api.deps import loris_instance
from loris.auth.deps import get_user
from loris.auth.models import User
from loris.instance import LorisInstance
from loris.modules.base import PageNotFound

router = APIRouter(tags=["pages"])


async def _render(
    loris: LorisInstance,
    user: User,
    module_name: str,
    page_name: str | None,
    identifier: str | None,
    comment_id: str | None,
) -> HTMLResponse:
    module = loris.get_module(module_name)
    if module is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Module not found")
    if not module.has_access(user):
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Permission denied")
    try:
        page = module.load_page(page_name, identifier=identifier, comment_id=comment_id)
    except PageNotFound as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Page not found") from e
    if not page.has_access(user):
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Permission denied")

    await page.setup()
    return HTMLResponse(page.display())


@router.get("/{module_name}", response_class=HTMLResponse)
async def module_index(
    module_name: str,
    identifier: str | None = None,
    comment_id: str | None = None,
    user: User = Depends(get_user),
    loris: LorisInstance = Depends(loris_instance),
) -> HTMLResponse:
    return await _render(loris, user, module_name, None, identifier, comment_id)


@router.get("/{module_name}/{page_name}", response_class=HTMLResponse)
async def module_page(
    module_name: str,
    page_name: str,
    identifier: str | None = None,
    comment_id: str | None = None,
    user: User = Depends(get_user),
    loris: LorisInstance = Depends(loris_instance),
) -> HTMLResponse:
    return await _render(loris, user, module_name, page_name, identifier, comment_id)
