"""
loris.pages

Page controllers.

Responsibilities:
- `Page`: base class for server-rendered module pages.
- Breadcrumb trail types.
"""

from loris.pages.breadcrumbs import Breadcrumb, BreadcrumbTrail
from loris.pages.page import Page

__all__ = ["Breadcrumb", "BreadcrumbTrail", "Page"]
