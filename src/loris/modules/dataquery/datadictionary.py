"""
loris.modules.dataquery.datadictionary

Data dictionary lookups backed by a pre-built CouchDB view.

Responsibilities:
- Range query: every dictionary entry in a category.
- Key query: one dictionary entry per `"category,field"` key, in input order.
- Category listing for the first step of the query builder.

The view is keyed by `[category, field]`; range bounds and keys are passed
through to CouchDB unchanged in meaning.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from loris.couchdb.client import CouchDBClient
from loris.observability.logging import get_logger

log = get_logger(__name__)

DATADICTIONARY_VIEW = "datadictionary"
CATEGORIES_VIEW = "categories"

# Upper bound for the second key component; sorts after any field name LORIS generates.
RANGE_END_SENTINEL = "ZZZZZZZZ"


class InvalidKeysError(ValueError):
    pass


def parse_keys(raw: str) -> list[tuple[str, str]]:
    """
    Parse the `keys` request parameter: a JSON array of "category,field" strings.
    A key without a comma has an empty field component.
    """

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidKeysError(f"keys is not valid JSON: {e.msg}") from e
    if not isinstance(decoded, list):
        raise InvalidKeysError("keys must be a JSON array")

    parsed: list[tuple[str, str]] = []
    for item in decoded:
        text = "" if item is None else str(item)
        category, _, field = text.partition(",")
        # Only the first two components are meaningful; anything after a second comma is ignored.
        field = field.split(",", 1)[0]
        parsed.append((category, field))
    return parsed


class DataDictionaryService:
    def __init__(self, *, couch: CouchDBClient, design_doc: str) -> None:
        self._couch = couch
        self._design_doc = design_doc

    async def by_category(self, category: str) -> list[dict[str, Any]]:
        rows = await self._couch.query_view(
            self._design_doc,
            DATADICTIONARY_VIEW,
            {
                "reduce": False,
                "startkey": [category],
                "endkey": [category, RANGE_END_SENTINEL],
            },
        )
        log.info("datadictionary_category", category=category, rows=len(rows))
        return rows

    async def by_keys(self, keys: Sequence[tuple[str, str]]) -> list[dict[str, Any] | None]:
        results: list[dict[str, Any] | None] = []
        for category, field in keys:
            rows = await self._couch.query_view(
                self._design_doc,
                DATADICTIONARY_VIEW,
                {"reduce": False, "key": [category, field]},
            )
            if not rows:
                log.warning("datadictionary_key_missing", category=category, field=field)
            # Positions line up with the requested keys; a missing entry stays as None.
            results.append(rows[0] if rows else None)
        return results

    async def categories(self) -> list[dict[str, Any]]:
        return await self._couch.query_view(
            self._design_doc,
            CATEGORIES_VIEW,
            {"reduce": True, "group": True},
        )
