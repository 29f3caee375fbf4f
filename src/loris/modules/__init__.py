"""
loris.modules

LORIS module system.

Responsibilities:
- `Module` base class (name, long name, access check, page loading).
- Concrete modules live in subpackages (e.g. `modules.dataquery`).
"""

# Package marker; modules are imported directly from submodules.
