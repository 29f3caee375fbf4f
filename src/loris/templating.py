"""
loris.templating

Shared Jinja2 environment for server-rendered pages and widgets.

Responsibilities:
- Locate the package `templates/` directory.
- Register filters used by templates (inline CSS rendering).
"""

from __future__ import annotations

import os

from fastapi.templating import Jinja2Templates

from loris.ui.styles import css

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

templates.env.filters["css"] = css
