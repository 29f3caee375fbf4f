"""
loris.forms.loris_form

Form builder used by page controllers.

Responsibilities:
- Accumulate an ordered mapping of field name -> descriptor dict.
- Build (without storing) descriptors for group children.
- Attach validation rules to elements and group children.
- Hold default values, freeze state, and validate submitted values.
- Render the form to HTML through the `form/form.html` template.

A descriptor is a plain dict: `{"name", "label", "type", ...attributes}`.
Rules are stored on the descriptor itself, e.g. `{"required": True,
"requireMsg": "..."}`.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from markupsafe import Markup

from loris.templating import templates

Descriptor = dict[str, Any]

# Rule name -> does it need a format argument.
SUPPORTED_RULES: dict[str, bool] = {
    "required": False,
    "numeric": False,
    "email": False,
    "regex": True,
}

# `required` keeps its historical message key; other rules use `<rule>Msg`.
_MSG_KEYS = {"required": "requireMsg"}

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NUMERIC_RE = re.compile(r"^-?\d+(\.\d+)?$")

# Element types that never carry a submitted value.
_STATIC_TYPES = frozenset({"header", "static", "file"})


class FormError(Exception):
    pass


def message_key(rule: str) -> str:
    return _MSG_KEYS.get(rule, f"{rule}Msg")


class LorisForm:
    def __init__(self, name: str = "test_form") -> None:
        self.name = name
        self.form: dict[str, Descriptor] = {}
        self.defaults: dict[str, Any] = {}
        self.frozen = False
        self._anon = itertools.count()

    # -- element construction -------------------------------------------------

    def create_element(
        self,
        type_: str,
        name: str | None,
        label: str | None,
        attribs: Mapping[str, Any] | None = None,
    ) -> Descriptor:
        el: Descriptor = {}
        if name is not None:
            el["name"] = name
        el["label"] = label
        el["type"] = type_
        if attribs:
            el.update(attribs)
        return el

    def add_element(
        self,
        type_: str,
        name: str | None,
        label: str | None,
        attribs: Mapping[str, Any] | None = None,
    ) -> Descriptor:
        el = self.create_element(type_, name, label, attribs)
        key = name if name is not None else f"__{type_}_{next(self._anon)}"
        self.form[key] = el
        return el

    def create_group(
        self,
        elements: Sequence[Descriptor],
        name: str,
        label: str | None = None,
        delimiter: str = " ",
        options: Mapping[str, Any] | bool | None = None,
    ) -> Descriptor:
        return {
            "name": name,
            "type": "group",
            "label": label,
            "delimiter": delimiter,
            "options": options,
            "elements": list(elements),
        }

    def add_group(
        self,
        elements: Sequence[Descriptor],
        name: str,
        label: str | None = None,
        delimiter: str = " ",
        options: Mapping[str, Any] | bool | None = None,
    ) -> Descriptor:
        group = self.create_group(elements, name, label, delimiter, options)
        self.form[name] = group
        return group

    # -- rules ----------------------------------------------------------------

    def _apply_rule(self, el: Descriptor, message: str, rule: str, fmt: Any = None) -> None:
        if rule not in SUPPORTED_RULES:
            raise FormError(f"unsupported rule type: {rule}")
        if SUPPORTED_RULES[rule] and fmt is None:
            raise FormError(f"rule {rule} requires a format")
        el[rule] = True
        el[message_key(rule)] = message
        if fmt is not None:
            el[f"{rule}Format"] = fmt

    def add_rule(self, element: str, message: str, rule: str, fmt: Any = None) -> None:
        if element not in self.form:
            raise FormError(f"cannot add rule to unknown element: {element}")
        self._apply_rule(self.form[element], message, rule, fmt)

    def add_group_rule(self, group: str, rules: Sequence[Sequence[Sequence[Any]]]) -> None:
        """
        `rules[i]` is a list of `(message, rule[, format])` entries for the
        i-th element of the group.
        """

        el = self.form.get(group)
        if el is None or el.get("type") != "group":
            raise FormError(f"cannot add group rule to non-group element: {group}")
        children = el["elements"]
        if len(rules) > len(children):
            raise FormError(f"group {group} has {len(children)} elements, got {len(rules)} rule sets")
        for child, child_rules in zip(children, rules):
            for entry in child_rules:
                self._apply_rule(child, *entry)

    # -- state ----------------------------------------------------------------

    def set_defaults(self, defaults: Mapping[str, Any] | None = None) -> dict[str, Any]:
        if defaults:
            self.defaults.update(defaults)
        return self.defaults

    def get_defaults(self) -> dict[str, Any]:
        return self.defaults

    def freeze(self) -> None:
        self.frozen = True

    def is_frozen(self) -> bool:
        return self.frozen

    def _iter_value_elements(self, elements: Iterable[Descriptor]) -> Iterable[Descriptor]:
        for el in elements:
            if el.get("type") == "group":
                yield from self._iter_value_elements(el["elements"])
            elif el.get("type") not in _STATIC_TYPES and "name" in el:
                yield el

    def validate(self, values: Mapping[str, Any]) -> dict[str, str]:
        errors: dict[str, str] = {}
        for el in self._iter_value_elements(self.form.values()):
            name = el["name"]
            if name in errors:
                continue
            raw = values.get(name)
            value = "" if raw is None else str(raw).strip()
            if el.get("required") and value == "":
                errors[name] = el.get(message_key("required")) or "Required"
                continue
            if value == "":
                continue
            if el.get("numeric") and not _NUMERIC_RE.match(value):
                errors[name] = el.get(message_key("numeric")) or "Must be numeric"
            elif el.get("email") and not _EMAIL_RE.match(value):
                errors[name] = el.get(message_key("email")) or "Invalid email address"
            elif el.get("regex") and not re.search(el["regexFormat"], value):
                errors[name] = el.get(message_key("regex")) or "Invalid format"
        return errors

    # -- rendering ------------------------------------------------------------

    def render(self, errors: Mapping[str, str] | None = None) -> Markup:
        tpl = templates.get_template("form/form.html")
        return Markup(
            tpl.render(
                form=self,
                elements=list(self.form.values()),
                defaults=self.defaults,
                frozen=self.is_frozen(),
                errors=errors or {},
            )
        )


# --- Module Notes -----------------------------------------------------------
# Descriptors are plain dicts; page controllers and templates read
# them directly, and tests compare them with literal dicts.
