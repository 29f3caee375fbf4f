"""
loris.modules.dataquery.page

Index page of the data query tool.

Responsibilities:
- Lay out the query-building steps with the stepper widget.
- Offer the data dictionary categories as the starting point of a query.
- Report CouchDB availability through the progress bar.
"""

from __future__ import annotations

from typing import Any

from loris.couchdb.client import CouchDBError
from loris.modules.dataquery.datadictionary import DataDictionaryService
from loris.observability.logging import get_logger
from loris.pages.page import Page
from loris.ui.stepper import ProgressBar, Stepper, StepperPanel, StepSpec

log = get_logger(__name__)

STEPS: tuple[StepSpec, ...] = (
    StepSpec(title="Info", id="Info"),
    StepSpec(title="Define Fields", id="DefineFields"),
    StepSpec(title="Define Filters", id="DefineFilters"),
    StepSpec(title="View Data", id="ViewData"),
)


def _category_name(row: dict[str, Any]) -> str:
    key = row.get("key")
    if isinstance(key, list):
        return str(key[0]) if key else ""
    return "" if key is None else str(key)


class DataQueryPage(Page):
    async def setup(self) -> None:
        progress = ProgressBar(message="Loading data dictionary...", percentage=0)
        categories: dict[str, str] = {"": ""}

        couch = self.loris.couchdb
        if couch is None:
            progress.message = "Data dictionary is not configured"
        else:
            service = DataDictionaryService(
                couch=couch, design_doc=self.loris.settings.dataquery_design_doc
            )
            try:
                rows = await service.categories()
            except CouchDBError as e:
                log.error("dataquery_categories_failed", error=str(e))
                progress.message = "Unable to load the data dictionary"
            else:
                for row in rows:
                    name = _category_name(row)
                    if name:
                        categories[name] = f"{name} ({row.get('value', 0)})"
                progress.visible = False
                progress.percentage = 100

        self.add_header("Define Fields")
        self.add_select("category", "Category", categories)
        self.add_hidden("design_doc", self.loris.settings.dataquery_design_doc)

        stepper = Stepper(steps=STEPS, active_step=0, highlight_steps=True)
        panels = [
            StepperPanel(tab_id=spec.id or spec.title, active=i == stepper.active_step).render()
            for i, spec in enumerate(STEPS)
        ]
        self.set_template_var("stepper_html", stepper.render())
        self.set_template_var("progress_bar_html", progress.render())
        self.set_template_var("panels", panels)
        self.set_template_var("category_count", len(categories) - 1)

    def get_js_dependencies(self) -> list[str]:
        base = self.loris.settings.base_url
        return [*super().get_js_dependencies(), f"{base}/dataquery/js/index.js"]

    def get_css_dependencies(self) -> list[str]:
        base = self.loris.settings.base_url
        return [*super().get_css_dependencies(), f"{base}/dataquery/css/dataquery.css"]
