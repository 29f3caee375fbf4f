"""
loris.study_entities.site_haver

Site-based access control primitives.

Responsibilities:
- `CenterID`: immutable identifier of a study site (psc.CenterID).
- `SiteHaver`: protocol for entities owned by exactly one site.
- `is_accessible_by`: decide whether a user may see a site-owned entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from loris.auth.models import User


@dataclass(frozen=True, slots=True, order=True)
class CenterID:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("CenterID value must be an int")
        if self.value < 1:
            raise ValueError(f"invalid CenterID: {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value


@runtime_checkable
class SiteHaver(Protocol):
    """
    An entity that belongs to a single study site. Access to it is granted to
    users affiliated with that site.
    """

    def get_center_id(self) -> CenterID: ...


def is_accessible_by(
    entity: SiteHaver,
    user: User,
    *,
    all_sites_permission: str | None = None,
) -> bool:
    if all_sites_permission is not None and user.has_permission(all_sites_permission):
        return True
    return user.has_center(entity.get_center_id())


# --- Module Notes -----------------------------------------------------------
# A Protocol (rather than an ABC) so ORM models can satisfy it without mixing
# metaclasses with SQLAlchemy's declarative base.
