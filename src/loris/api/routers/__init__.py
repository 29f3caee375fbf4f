"""
loris.api.routers

HTTP routers for the LORIS portal.
"""

# Package marker.
