"""
loris.modules.dataquery

Data query tool (DQT) module.

Responsibilities:
- Data dictionary lookups against the CouchDB `DQG-2.0` design document.
- The DQT index page (stepper + progress bar).
"""

# Package marker.
