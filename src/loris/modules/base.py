"""
loris.modules.base

Module base class.

Responsibilities:
- Identify a module by its URL name and human-readable long name.
- Gate access to all of a module's pages.
- Map page names to page controller classes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from loris.pages.breadcrumbs import humanize

if TYPE_CHECKING:
    from loris.auth.models import User
    from loris.instance import LorisInstance
    from loris.pages.page import Page


class PageNotFound(Exception):
    pass


class Module:
    long_name: ClassVar[str] = ""
    # page name -> Page subclass; the module's index page is keyed by the module name.
    pages: ClassVar[dict[str, type[Page]]] = {}

    def __init__(self, loris: LorisInstance, name: str) -> None:
        self.loris = loris
        self.name = name

    def get_long_name(self) -> str:
        return self.long_name or humanize(self.name)

    def has_access(self, user: User) -> bool:
        return True

    def load_page(
        self,
        page_name: str | None = None,
        *,
        identifier: str | None = None,
        comment_id: str | None = None,
    ) -> Page:
        page_name = page_name or self.name
        cls = self.pages.get(page_name)
        if cls is None:
            raise PageNotFound(f"{self.name}/{page_name}")
        return cls(self.loris, self, page_name, identifier, comment_id)


class NullModule(Module):
    """A module with no pages; used when a page has no owning module."""

    long_name = "Null Module"
