"""
loris.pages.breadcrumbs

Breadcrumb trail shown at the top of every module page.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


def humanize(name: str) -> str:
    """`visit_2nd_label` -> `Visit 2nd Label`; only each word's first letter changes."""

    return " ".join(w[:1].upper() + w[1:] for w in name.replace("_", " ").split(" "))


@dataclass(frozen=True, slots=True)
class Breadcrumb:
    label: str
    link: str


class BreadcrumbTrail:
    def __init__(self, *crumbs: Breadcrumb) -> None:
        self.crumbs: tuple[Breadcrumb, ...] = crumbs

    def __iter__(self) -> Iterator[Breadcrumb]:
        return iter(self.crumbs)

    def __len__(self) -> int:
        return len(self.crumbs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BreadcrumbTrail):
            return NotImplemented
        return self.crumbs == other.crumbs

    def __repr__(self) -> str:
        return f"BreadcrumbTrail{self.crumbs!r}"

    def to_list(self) -> list[dict[str, str]]:
        return [{"text": c.label, "link": c.link} for c in self.crumbs]
