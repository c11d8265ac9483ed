# File: /fieldview/__init__.py | Version: 1.0 | Title: Custom field filtering, saved views and bulk edit
"""
fieldview: evaluates custom-field filter rules over records, validates and
round-trips saved view bundles, and builds typed bulk-edit payloads.
"""
from fieldview.core.field_types import FieldCategory, category_of, is_editable
from fieldview.core.selection import Selection
from fieldview.crud.bulk_edit import apply_bulk_edit, build_payload
from fieldview.crud.filtering import evaluate, filter_records, passes_all
from fieldview.crud.view import decode_config, encode_config

__version__ = "0.1.0"

__all__ = [
    "FieldCategory",
    "Selection",
    "apply_bulk_edit",
    "build_payload",
    "category_of",
    "decode_config",
    "encode_config",
    "evaluate",
    "filter_records",
    "is_editable",
    "passes_all",
]
