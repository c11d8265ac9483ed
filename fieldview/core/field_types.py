# File: /fieldview/core/field_types.py | Version: 1.0 | Title: Field Type Registry (type -> category, operators, editability)
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Tuple

from fieldview.schemas.custom_fields import FieldType
from fieldview.schemas.filters import FilterOperator


class FieldCategory(str, Enum):
    TEXT = "text"
    NUMERIC = "numeric"
    DATE = "date"
    BOOLEAN = "boolean"
    SELECT = "select"
    MULTISELECT = "multiselect"


CATEGORY_BY_TYPE: Dict[FieldType, FieldCategory] = {
    FieldType.text: FieldCategory.TEXT,
    FieldType.url: FieldCategory.TEXT,
    FieldType.email: FieldCategory.TEXT,
    FieldType.formula: FieldCategory.TEXT,
    FieldType.rollup: FieldCategory.TEXT,
    FieldType.number: FieldCategory.NUMERIC,
    FieldType.currency: FieldCategory.NUMERIC,
    FieldType.percent: FieldCategory.NUMERIC,
    FieldType.rating: FieldCategory.NUMERIC,
    FieldType.date: FieldCategory.DATE,
    FieldType.checkbox: FieldCategory.BOOLEAN,
    FieldType.select: FieldCategory.SELECT,
    FieldType.multiselect: FieldCategory.MULTISELECT,
}

# Derived fields are computed, never written
DERIVED_TYPES = frozenset({FieldType.formula, FieldType.rollup})

_Op = FilterOperator
_TEXT_OPS = (_Op.contains, _Op.equals, _Op.not_contains, _Op.is_empty, _Op.is_not_empty)
_NUMBER_OPS = (
    _Op.equals,
    _Op.not_equals,
    _Op.greater_than,
    _Op.less_than,
    _Op.greater_or_equal,
    _Op.less_or_equal,
    _Op.is_empty,
    _Op.is_not_empty,
)

OPERATORS_BY_TYPE: Dict[FieldType, Tuple[FilterOperator, ...]] = {
    FieldType.text: _TEXT_OPS,
    FieldType.url: _TEXT_OPS,
    FieldType.email: _TEXT_OPS,
    FieldType.number: _NUMBER_OPS,
    FieldType.currency: _NUMBER_OPS,
    FieldType.percent: _NUMBER_OPS,
    FieldType.rating: (
        _Op.equals,
        _Op.greater_than,
        _Op.less_than,
        _Op.greater_or_equal,
        _Op.less_or_equal,
    ),
    FieldType.date: (_Op.equals, _Op.before, _Op.after, _Op.is_empty, _Op.is_not_empty),
    FieldType.checkbox: (_Op.is_true, _Op.is_false),
    FieldType.select: (_Op.equals, _Op.not_equals, _Op.is_empty, _Op.is_not_empty),
    FieldType.multiselect: (_Op.contains, _Op.not_contains, _Op.is_empty, _Op.is_not_empty),
    FieldType.formula: (_Op.equals, _Op.contains, _Op.is_empty, _Op.is_not_empty),
    FieldType.rollup: (_Op.equals, _Op.contains, _Op.is_empty, _Op.is_not_empty),
}

VALUELESS_OPERATORS = frozenset(
    {_Op.is_empty, _Op.is_not_empty, _Op.is_true, _Op.is_false}
)


def category_of(field_type: FieldType | str) -> FieldCategory:
    return CATEGORY_BY_TYPE[FieldType(field_type)]


def is_editable(field_type: FieldType | str) -> bool:
    return FieldType(field_type) not in DERIVED_TYPES


def editable_fields(fields: Iterable) -> List:
    """
    Fields that may be offered to bulk edit, in their original order.
    """
    return [f for f in fields if is_editable(f.type)]


def operators_for_type(field_type: FieldType | str) -> List[FilterOperator]:
    """
    Ordered operator menu for a field type; the first entry is the default
    operator of a freshly added rule.
    """
    return list(OPERATORS_BY_TYPE[FieldType(field_type)])


def operator_needs_value(op: FilterOperator | str) -> bool:
    return FilterOperator(op) not in VALUELESS_OPERATORS
