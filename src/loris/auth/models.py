"""
loris.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`User`) injected into endpoints and pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loris.study_entities.site_haver import CenterID


@dataclass(frozen=True, slots=True)
class User:
    """
    Authenticated LORIS user: a username, the permission codes granted to it,
    and the study sites it is affiliated with.
    """

    username: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    center_ids: frozenset[CenterID] = field(default_factory=frozenset)

    @property
    def is_superuser(self) -> bool:
        return "superuser" in self.permissions

    def has_permission(self, code: str) -> bool:
        return self.is_superuser or code in self.permissions

    def has_any_permission(self, *codes: str) -> bool:
        return any(self.has_permission(c) for c in codes)

    def has_center(self, center_id: CenterID) -> bool:
        return center_id in self.center_ids


# --- Module Notes -----------------------------------------------------------
# Site membership is used by `study_entities.site_haver.is_accessible_by`.
