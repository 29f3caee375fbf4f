"""
loris.study_entities

Study entity abstractions shared by persistence and API layers.

Responsibilities:
- Site identifiers and the site-ownership protocol used for access control.
"""

from loris.study_entities.site_haver import CenterID, SiteHaver, is_accessible_by

__all__ = ["CenterID", "SiteHaver", "is_accessible_by"]
