"""
loris.forms

Form builder package.
"""

from loris.forms.loris_form import FormError, LorisForm

__all__ = ["FormError", "LorisForm"]
