"""
tests.test_stepper

Stepper, stepper panel, and progress bar styles and rendering.
"""

from __future__ import annotations

from loris.ui.stepper import ACTIVE_COLOR, ProgressBar, Stepper, StepperPanel, StepSpec
from loris.ui.styles import css

STEPS = [StepSpec("Info"), StepSpec("Define Fields"), StepSpec("Define Filters"), StepSpec("View Data")]


def test_steps_share_width_and_number_from_one() -> None:
    views = Stepper(steps=STEPS).step_views()
    assert [v.width for v in views] == [25, 25, 25, 25]
    assert [v.number for v in views] == [1, 2, 3, 4]
    assert [v.active for v in views] == [True, False, False, False]


def test_outer_lines_are_omitted() -> None:
    views = Stepper(steps=STEPS).step_views()
    assert views[0].line_left_style() == {}
    assert views[-1].line_right_style() == {}
    assert views[1].line_left_style()["borderTopColor"] == "#c6c6c6"
    assert views[1].line_right_style()["borderTopColor"] == "#c6c6c6"


def test_highlighting_marks_reached_steps() -> None:
    views = Stepper(steps=STEPS, active_step=2, highlight_steps=True).step_views()
    circles = [v.circle_style()["backgroundColor"] for v in views]
    assert circles == [ACTIVE_COLOR, ACTIVE_COLOR, ACTIVE_COLOR, "#E0E0E0"]

    # Left lines light up through the active step; right lines stop before it.
    assert views[2].line_left_style()["borderTopColor"] == ACTIVE_COLOR
    assert views[1].line_right_style()["borderTopColor"] == ACTIVE_COLOR
    assert views[2].line_right_style()["borderTopColor"] == "#c6c6c6"
    assert views[0].line_left_style() == {"borderTopColor": ACTIVE_COLOR}


def test_without_highlighting_only_active_circle_is_coloured() -> None:
    views = Stepper(steps=STEPS, active_step=2).step_views()
    circles = [v.circle_style()["backgroundColor"] for v in views]
    assert circles == ["#E0E0E0", "#E0E0E0", ACTIVE_COLOR, "#E0E0E0"]
    assert views[1].line_right_style()["borderTopColor"] == "#c6c6c6"


def test_hidden_stepper_stays_in_markup() -> None:
    html = Stepper(steps=STEPS, visible=False).render()
    assert "opacity: 0" in html
    assert "right: 9999px" in html
    assert "Define Filters" in html


def test_visible_stepper_has_no_container_style() -> None:
    stepper = Stepper(steps=STEPS)
    assert stepper.container_style() is None
    assert '<div class="stepperContainer">' in stepper.render()


def test_stepper_panel_class() -> None:
    assert StepperPanel("Info", active=True).css_class == "tab-pane active"
    html = StepperPanel("ViewData", content="<b>x</b>").render()
    assert 'id="ViewData"' in html
    assert 'class="tab-pane"' in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html


def test_progress_bar() -> None:
    html = ProgressBar(message="Loading", percentage=40).render()
    assert "Loading" in html
    assert 'value="40"' in html
    assert ProgressBar(visible=False).render() == ""


def test_css_conversion() -> None:
    assert css({"fontSize": 16, "WebkitUserSelect": "none", "zIndex": 2, "opacity": 0}) == (
        "font-size: 16px; -webkit-user-select: none; z-index: 2; opacity: 0"
    )
    assert css(None) == ""
