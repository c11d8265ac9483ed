# File: /fieldview/crud/__init__.py | Version: 1.0 | Path: /fieldview/crud/__init__.py
from . import bulk_edit, filtering, view

__all__ = ["bulk_edit", "filtering", "view"]
