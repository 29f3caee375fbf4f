"""
loris.db.models

Relational schema for study entities.

Responsibilities:
- Define ORM models:
  - Site: a study site (psc table in legacy LORIS)
  - Candidate: a study participant registered at exactly one site
"""

from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loris.db.base import Base
from loris.study_entities.site_haver import CenterID


def _utcnow() -> datetime:
    return datetime.utcnow()


class Sex(enum.StrEnum):
    male = "Male"
    female = "Female"
    other = "Other"


class Site(Base):
    __tablename__ = "psc"

    center_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    alias: Mapped[str] = mapped_column(String(3), nullable=False)
    mri_alias: Mapped[str] = mapped_column(String(4), nullable=False, default="")
    study_site: Mapped[bool] = mapped_column(nullable=False, default=True)

    candidates: Mapped[list[Candidate]] = relationship(back_populates="site")


class Candidate(Base):
    __tablename__ = "candidate"

    cand_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    pscid: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    registration_center_id: Mapped[int] = mapped_column(
        ForeignKey("psc.center_id"), nullable=False, index=True
    )
    sex: Mapped[Sex | None] = mapped_column(Enum(Sex), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(nullable=True)
    active: Mapped[bool] = mapped_column(nullable=False, default=True)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False, default="Human")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    site: Mapped[Site] = relationship(back_populates="candidates")

    __table_args__ = (Index("ix_candidate_center_active", "registration_center_id", "active"),)

    # SiteHaver
    def get_center_id(self) -> CenterID:
        return CenterID(self.registration_center_id)


# --- Module Notes -----------------------------------------------------------
# Table names follow the legacy LORIS schema so existing SQL dumps stay recognizable.
