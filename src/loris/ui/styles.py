"""
loris.ui.styles

Inline style helpers.

Style dicts use camelCase property names (as React components do) and are
converted to CSS declaration strings for `style="..."` attributes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

Style = dict[str, Any]

# Numeric values for these properties are emitted without a unit.
_UNITLESS = frozenset({"opacity", "zIndex", "fontWeight", "lineHeight", "flex", "order"})

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def merge(*styles: Mapping[str, Any]) -> Style:
    out: Style = {}
    for s in styles:
        out.update(s)
    return out


def _prop_name(name: str) -> str:
    kebab = _CAMEL_RE.sub("-", name).lower()
    # WebkitUserSelect -> -webkit-user-select
    if name[:1].isupper():
        kebab = "-" + kebab
    return kebab


def _prop_value(name: str, value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if name in _UNITLESS or value == 0:
            return f"{value:g}"
        return f"{value:g}px"
    return str(value)


def css(style: Mapping[str, Any] | None) -> str:
    if not style:
        return ""
    return "; ".join(f"{_prop_name(k)}: {_prop_value(k, v)}" for k, v in style.items())
