# File: /fieldview/schemas/filters.py | Version: 1.0 | Title: Custom Field Filter Schemas
from __future__ import annotations

from enum import Enum

from pydantic import Field

from fieldview.schemas._base import BaseSchema


class FilterOperator(str, Enum):
    equals = "equals"
    not_equals = "not_equals"
    contains = "contains"
    not_contains = "not_contains"
    greater_than = "greater_than"
    less_than = "less_than"
    greater_or_equal = "greater_or_equal"
    less_or_equal = "less_or_equal"
    before = "before"
    after = "after"
    is_true = "is_true"
    is_false = "is_false"
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"


class FilterRule(BaseSchema):
    id: str  # opaque, unique within one rule set
    field_id: int
    operator: FilterOperator
    value: str = Field(description="Literal compared against the stored value, parsed per field type")
