"""
loris.ui.stepper

Stepper, stepper panel, and progress bar widgets for the data query tool.

Responsibilities:
- Compute per-step styles (circle, title, connector lines) from position and
  the active step, highlighting completed steps when requested.
- Render the widgets to HTML through `components/*.html` templates.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from markupsafe import Markup

from loris.templating import templates
from loris.ui.styles import Style, merge

ACTIVE_COLOR = "#4e8fde"

_CIRCLE_DEFAULT: Style = {
    "width": 32,
    "height": 32,
    "color": "#fff",
    "padding": "2px",
    "margin": "0 auto",
    "display": "block",
    "cursor": "pointer",
    "textAlign": "center",
    "borderRadius": "50%",
    "backgroundColor": "#E0E0E0",
}
_CIRCLE_ACTIVE: Style = {"color": "#fff", "backgroundColor": ACTIVE_COLOR}

_TITLE_DEFAULT: Style = {
    "fontSize": 16,
    "color": "black",
    "display": "block",
    "fontWeight": "300",
    "cursor": "pointer",
    "margin": "8px 0 0 0",
    "textAlign": "center",
}
_TITLE_ACTIVE: Style = {"color": "black"}

_LINE_LEFT: Style = {
    "left": "0",
    "top": "16px",
    "right": "50%",
    "height": "1px",
    "zIndex": "-1",
    "position": "absolute",
    "borderTopWidth": "1px",
    "borderTopStyle": "solid",
    "borderTopColor": "#c6c6c6",
}
_LINE_RIGHT: Style = {
    "right": "0",
    "left": "50%",
    "top": "16px",
    "zIndex": "-1",
    "height": "1px",
    "marginLeft": "20px",
    "position": "absolute",
    "borderTopWidth": "1px",
    "borderTopStyle": "solid",
    "borderTopColor": "#c6c6c6",
}
_LINE_ACTIVE: Style = {"borderTopColor": ACTIVE_COLOR}

_HIDDEN: Style = {"opacity": 0, "position": "absolute", "right": "9999px"}


@dataclass(frozen=True, slots=True)
class StepSpec:
    """What a caller provides per step: a title and an optional click target."""

    title: str
    id: str | None = None
    href: str | None = None


@dataclass(frozen=True, slots=True)
class Step:
    index: int
    length: int
    title: str
    width: float
    active: bool = False
    highlight_steps: bool = False
    active_index: int = 0
    id: str | None = None
    href: str | None = None

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def _reached(self) -> bool:
        return self.highlight_steps and self.index <= self.active_index

    def step_style(self) -> Style:
        return {
            "width": f"{self.width:g}%",
            "padding": "0 0 2px 0",
            "position": "relative",
            "display": "table-cell",
            "WebkitUserSelect": "none",
            "userSelect": "none",
        }

    def circle_style(self) -> Style:
        return merge(
            _CIRCLE_DEFAULT,
            _CIRCLE_ACTIVE if self.active else {},
            _CIRCLE_ACTIVE if self._reached else {},
        )

    def title_style(self) -> Style:
        return merge(_TITLE_DEFAULT, _TITLE_ACTIVE if self.active else {})

    def line_left_style(self) -> Style:
        base = {} if self.index == 0 else _LINE_LEFT
        return merge(base, _LINE_ACTIVE if self._reached else {})

    def line_right_style(self) -> Style:
        base = {} if self.index == self.length - 1 else _LINE_RIGHT
        # The right line only lights up once the *next* step is reached.
        highlighted = self.highlight_steps and self.index < self.active_index
        return merge(base, _LINE_ACTIVE if highlighted else {})


@dataclass(slots=True)
class Stepper:
    steps: Sequence[StepSpec]
    active_step: int = 0
    highlight_steps: bool = False
    visible: bool = True

    def container_style(self) -> Style | None:
        return None if self.visible else dict(_HIDDEN)

    def step_views(self) -> list[Step]:
        n = len(self.steps)
        return [
            Step(
                index=i,
                length=n,
                title=spec.title,
                width=100 / n,
                active=i == self.active_step,
                highlight_steps=self.highlight_steps,
                active_index=self.active_step,
                id=spec.id,
                href=spec.href,
            )
            for i, spec in enumerate(self.steps)
        ]

    def render(self) -> Markup:
        tpl = templates.get_template("components/stepper.html")
        return Markup(tpl.render(stepper=self, steps=self.step_views()))


@dataclass(slots=True)
class StepperPanel:
    tab_id: str
    active: bool = False
    content: str = ""

    @property
    def css_class(self) -> str:
        return "tab-pane active" if self.active else "tab-pane"

    def render(self) -> Markup:
        tpl = templates.get_template("components/stepper_panel.html")
        return Markup(tpl.render(panel=self))


@dataclass(slots=True)
class ProgressBar:
    message: str = ""
    visible: bool = True
    percentage: float = 0

    def render(self) -> Markup:
        if not self.visible:
            return Markup("")
        tpl = templates.get_template("components/progress_bar.html")
        return Markup(tpl.render(bar=self))
