"""
loris.ui

Server-rendered presentational widgets.

Responsibilities:
- Inline style helpers (`ui.styles`).
- Stepper / stepper panel / progress bar widgets (`ui.stepper`).
"""

# Package marker; widgets are imported directly from submodules.
