"""
loris.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (User + permission checks).
"""

# Package marker.
