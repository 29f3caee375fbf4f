"""
loris.modules.dataquery.module

Module definition for the data query tool.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loris.modules.base import Module
from loris.modules.dataquery.page import DataQueryPage

if TYPE_CHECKING:
    from loris.auth.models import User

DATAQUERY_VIEW_PERMISSION = "dataquery_view"


class DataQueryModule(Module):
    long_name = "Data Query Tool"
    pages = {"dataquery": DataQueryPage}

    def has_access(self, user: User) -> bool:
        return user.has_permission(DATAQUERY_VIEW_PERMISSION)
