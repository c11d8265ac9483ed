# File: /fieldview/schemas/__init__.py | Version: 1.0 | Path: /fieldview/schemas/__init__.py
from . import custom_fields, filters, view

__all__ = ["custom_fields", "filters", "view"]
