"""
loris.pages.page

Base page controller for module pages.

Responsibilities:
- Hold the page identity (module, page, identifier, comment id) and template data.
- Build the page form field-by-field through `LorisForm`.
- Render the page through its Jinja2 template.
- Provide the breadcrumb trail and JS/CSS asset lists.

Subclasses override `setup()` to populate the page, `has_access()` to restrict it,
and the dependency getters to add module-specific assets.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from loris.forms.loris_form import Descriptor, LorisForm
from loris.pages.breadcrumbs import Breadcrumb, BreadcrumbTrail, humanize
from loris.templating import templates

if TYPE_CHECKING:
    from loris.auth.models import User
    from loris.instance import LorisInstance
    from loris.modules.base import Module

INPUT_CLASS = "form-control input-sm"

NOT_ANSWERED_OPTIONS = {"": "", "not_answered": "Not Answered"}


class Page:
    def __init__(
        self,
        loris: LorisInstance,
        module: Module,
        page: str,
        identifier: str | None = None,
        comment_id: str | None = None,
        form_name: str = "test_form",
    ) -> None:
        self.loris = loris
        self.module = module
        self.name = module.name
        self.page = page
        self.identifier = identifier
        self.comment_id = comment_id
        self.template = page
        self.form = LorisForm(form_name)
        self.tpl_data: dict[str, Any] = {}
        self.skip_template = False
        # Extra options passed to every date element (e.g. min/max year).
        self.date_options: dict[str, Any] | None = None

    async def setup(self) -> None:
        """Populate template data and form elements before display."""

    # -- template data --------------------------------------------------------

    def set_template_var(self, name: str, value: Any) -> None:
        self.tpl_data[name] = value

    def get_template_data(self) -> dict[str, Any]:
        return self.tpl_data

    # -- form elements --------------------------------------------------------

    def add_file(self, name: str, label: str) -> None:
        self.form.add_element("file", name, label, {"class": "fileUpload"})

    def add_header(self, label: str) -> None:
        self.form.add_element("header", None, label)

    def add_select(
        self,
        name: str,
        label: str,
        options: Mapping[str, str],
        attribs: Mapping[str, Any] | None = None,
    ) -> None:
        self.form.add_element(
            "select", name, label, {"class": INPUT_CLASS, **(attribs or {}), "options": options}
        )

    def add_label(self, label: str) -> None:
        self.form.add_element("static", None, label)

    def add_score_column(self, name: str, label: str) -> None:
        self.form.add_element("static", name, label)

    def add_basic_text(self, name: str, label: str, attribs: Mapping[str, Any] | None = None) -> None:
        self.form.add_element("text", name, label, {"class": INPUT_CLASS, **(attribs or {})})

    def add_basic_textarea(
        self, name: str, label: str, attribs: Mapping[str, Any] | None = None
    ) -> None:
        self.form.add_element("textarea", name, label, {"class": INPUT_CLASS, **(attribs or {})})

    def add_basic_date(self, name: str, label: str, attribs: Mapping[str, Any] | None = None) -> None:
        self.form.add_element(
            "date",
            name,
            label,
            {"class": INPUT_CLASS, **(attribs or {}), "options": dict(self.date_options or {})},
        )

    def add_checkbox(self, name: str, label: str, options: Mapping[str, Any] | None = None) -> None:
        self.form.add_element("advcheckbox", name, label, {"class": INPUT_CLASS, **(options or {})})

    def add_radio(self, name: str, label: str, radios: Sequence[Mapping[str, Any]]) -> None:
        elements = [
            self.form.create_element(
                "radio", name, radio["label"], {"value": radio["value"], "class": INPUT_CLASS}
            )
            for radio in radios
        ]
        self.form.add_group(elements, f"{name}_group", label, " ", False)

    def add_hidden(self, name: str, value: Any) -> None:
        self.form.add_element("hidden", name, None, {"value": value})

    def add_textarea_group(self, field: str, label: str) -> None:
        """Textarea plus a `<field>_status` select for marking it not answered."""

        elements = [
            self.form.create_element("textarea", field, "", {"class": INPUT_CLASS}),
            self.form.create_element(
                "select",
                f"{field}_status",
                "",
                {"options": dict(NOT_ANSWERED_OPTIONS), "class": f"{INPUT_CLASS} not-answered"},
            ),
        ]
        self.form.add_group(elements, f"{field}_group", label, " ", False)

    def add_password(self, name: str, label: str | None = None) -> None:
        self.form.add_element("password", name, label, {"class": INPUT_CLASS})

    def add_rule(self, element: str, message: str, rule: str, fmt: Any = None) -> None:
        self.form.add_rule(element, message, rule, fmt)

    def add_group(
        self,
        elements: Sequence[Descriptor],
        name: str,
        label: str | None = None,
        delimiter: str = " ",
        options: Mapping[str, Any] | bool | None = None,
    ) -> None:
        self.form.add_group(elements, name, label, delimiter, options)

    def add_group_rule(self, group: str, rules: Sequence[Sequence[Sequence[Any]]]) -> None:
        self.form.add_group_rule(group, rules)

    # -- detached elements (for groups) ---------------------------------------

    def create_select(
        self, name: str, label: str | None, options: Mapping[str, str] | None = None
    ) -> Descriptor:
        return self.form.create_element(
            "select", name, label, {"class": INPUT_CLASS, "options": options}
        )

    def create_label(self, label: str, name: str | None = None) -> Descriptor:
        return self.form.create_element("static", name, label)

    def create_text(self, name: str, label: str | None = None) -> Descriptor:
        return self.form.create_element("text", name, label, {"class": INPUT_CLASS})

    def create_textarea(self, name: str, label: str | None = None) -> Descriptor:
        return self.form.create_element("textarea", name, label, {"class": INPUT_CLASS})

    def create_date(
        self, name: str, label: str | None, options: Mapping[str, Any] | None = None
    ) -> Descriptor:
        return self.form.create_element(
            "date", name, label, {"class": INPUT_CLASS, "options": options}
        )

    def create_checkbox(self, name: str, label: str | None) -> Descriptor:
        return self.form.create_element("advcheckbox", name, label)

    def create_radio(self, name: str, label: str | None) -> Descriptor:
        return self.form.create_element("radio", name, label)

    def create_password(self, name: str, label: str | None = None) -> Descriptor:
        return self.form.create_element("password", name, label, {"class": INPUT_CLASS})

    # -- defaults -------------------------------------------------------------

    def set_defaults(self, defaults: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.form.set_defaults(defaults)

    def get_defaults(self) -> dict[str, Any]:
        return self.form.get_defaults()

    # -- output ---------------------------------------------------------------

    def display(self) -> str:
        if self.skip_template:
            return ""

        settings = self.loris.settings
        context: dict[str, Any] = {
            **self.tpl_data,
            "module_name": self.name,
            "module_long_name": self.module.get_long_name(),
            "page_name": self.page,
            "base_url": settings.base_url,
            "breadcrumbs": self.get_breadcrumbs(),
            "js_dependencies": self.get_js_dependencies(),
            "css_dependencies": self.get_css_dependencies(),
            "form_html": self.form.render() if self.form.form else "",
        }
        tpl = templates.env.select_template([f"{self.template}.html", "page.html"])
        return tpl.render(context)

    def to_json(self) -> str:
        return json.dumps({"error": "Not implemented"})

    def has_access(self, user: User) -> bool:
        return True

    def get_breadcrumbs(self) -> BreadcrumbTrail:
        label = self.module.get_long_name()
        if self.page != self.name:
            sublabel = humanize(self.page)
            return BreadcrumbTrail(
                Breadcrumb(label, f"/{self.name}"),
                Breadcrumb(sublabel, f"/{self.name}/{self.page}"),
            )
        return BreadcrumbTrail(Breadcrumb(label, f"/{self.name}"))

    def get_js_dependencies(self) -> list[str]:
        base = self.loris.settings.base_url
        return [
            f"{base}/js/jquery/jquery-1.11.0.min.js",
            f"{base}/js/loris-scripts.js",
            f"{base}/js/modernizr/modernizr.min.js",
            f"{base}/js/polyfills.js",
            f"{base}/vendor/js/react/react.production.min.js",
            f"{base}/vendor/js/react/react-dom.production.min.js",
            f"{base}/js/jquery/jquery-ui-1.10.4.custom.min.js",
            f"{base}/js/jquery.dynamictable.js",
            f"{base}/js/jquery.fileupload.js",
            f"{base}/bootstrap/js/bootstrap.min.js",
            f"{base}/js/components/Breadcrumbs.js",
            f"{base}/js/util/queryString.js",
            f"{base}/js/components/Help.js",
        ]

    def get_css_dependencies(self) -> list[str]:
        base = self.loris.settings.base_url
        return [
            f"{base}/bootstrap/css/bootstrap.min.css",
            f"{base}/bootstrap/css/custom-css.css",
            f"{base}/js/jquery/datepicker/datepicker.css",
        ]


# --- Module Notes -----------------------------------------------------------
# Module pages are routed by `api.routers.pages`; templates fall back to `page.html`.
