"""
loris.instance

The running LORIS instance: settings, shared external clients, and the module registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loris.modules.base import Module
from loris.settings import Settings

if TYPE_CHECKING:
    from loris.couchdb.client import CouchDBClient


class LorisInstance:
    def __init__(
        self,
        settings: Settings,
        module_classes: dict[str, type[Module]] | None = None,
        *,
        couchdb: CouchDBClient | None = None,
    ) -> None:
        self.settings = settings
        # Set on app startup once the shared HTTP client exists.
        self.couchdb = couchdb
        self._modules: dict[str, Module] = {}
        for name, cls in (module_classes or {}).items():
            self._modules[name] = cls(self, name)

    def get_module(self, name: str) -> Module | None:
        return self._modules.get(name)


def default_modules() -> dict[str, type[Module]]:
    from loris.modules.dataquery.module import DataQueryModule

    return {"dataquery": DataQueryModule}
