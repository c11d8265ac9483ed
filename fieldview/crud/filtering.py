# File: /fieldview/crud/filtering.py | Version: 1.0 | Title: Custom field rule evaluation + AND-combination over records
from __future__ import annotations

import logging
import math
import re
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from fieldview.core.config import settings
from fieldview.core.field_types import (
    FieldCategory,
    category_of,
    operator_needs_value,
    operators_for_type,
)
from fieldview.schemas.custom_fields import (
    FieldDefinition,
    FieldValue,
    decode_tags,
    to_epoch_ms,
)
from fieldview.schemas.filters import FilterOperator, FilterRule

log = logging.getLogger(__name__)

ValuesIndex = Mapping[Hashable, Mapping[int, FieldValue]]
FieldsIndex = Mapping[int, FieldDefinition]

Op = FilterOperator


# ----------------------
# Value helpers
# ----------------------
# leading decimal literal; trailing text is ignored ("10px" -> 10)
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse_number(text: str) -> Optional[float]:
    m = _NUMBER_PREFIX.match(str(text).lstrip())
    if m is None:
        return None
    n = float(m.group(0).replace("Infinity", "inf"))
    return None if math.isnan(n) else n


def _is_empty(fv: Optional[FieldValue], category: FieldCategory) -> bool:
    if fv is None:
        return True
    if category == FieldCategory.BOOLEAN:
        return fv.boolean_value is None
    if category == FieldCategory.NUMERIC:
        # NOTE: a stored 0 counts as empty. Kept as-is; it is unclear whether
        # this is intended business logic or an accident of truthiness.
        return not fv.numeric_value
    if category == FieldCategory.DATE:
        return fv.date_value is None
    if category == FieldCategory.MULTISELECT:
        # raw storage check: any list, even [], counts as stored
        return fv.json_value is None or fv.json_value == ""
    return not fv.string_value


# ----------------------
# Per-category comparisons
# ----------------------
def _match_text(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    val = (fv.string_value or "").lower()
    needle = wanted.lower()
    if op == Op.equals:
        return val == needle
    if op == Op.contains:
        return needle in val
    if op == Op.not_contains:
        return needle not in val
    return True


def _match_numeric(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    stored = fv.numeric_value
    n = _parse_number(wanted)
    if stored is None or n is None:
        log.debug("numeric rule fails: stored=%r rule value=%r", stored, wanted)
        return False
    if op == Op.equals:
        return stored == n
    if op == Op.not_equals:
        return stored != n
    if op == Op.greater_than:
        return stored > n
    if op == Op.less_than:
        return stored < n
    if op == Op.greater_or_equal:
        return stored >= n
    if op == Op.less_or_equal:
        return stored <= n
    return True


def _match_date(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    stored = fv.date_value
    if stored is None:
        return False
    ts = to_epoch_ms(wanted)
    if ts is None:
        log.debug("date rule fails: unparsable rule value %r", wanted)
        return False
    if op == Op.equals:
        # day granularity, absorbs time-of-day and timezone drift
        return abs(stored - ts) < settings.DATE_EQUALS_TOLERANCE_MS
    if op == Op.before:
        return stored < ts
    if op == Op.after:
        return stored > ts
    return True


def _match_select(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    val = fv.string_value or ""
    if op == Op.equals:
        return val == wanted
    if op == Op.not_equals:
        return val != wanted
    return True


def _match_multiselect(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    selected = decode_tags(fv.json_value)
    if fv.json_value and not selected:
        log.debug("multiselect value could not be decoded: %r", fv.json_value)
    if op == Op.contains:
        return wanted in selected
    if op == Op.not_contains:
        return wanted not in selected
    return True


def _match_boolean(op: FilterOperator, fv: FieldValue, wanted: str) -> bool:
    # is_true / is_false are answered before category dispatch
    return True


_MATCHERS: Dict[FieldCategory, Callable[[FilterOperator, FieldValue, str], bool]] = {
    FieldCategory.TEXT: _match_text,
    FieldCategory.NUMERIC: _match_numeric,
    FieldCategory.DATE: _match_date,
    FieldCategory.SELECT: _match_select,
    FieldCategory.MULTISELECT: _match_multiselect,
    FieldCategory.BOOLEAN: _match_boolean,
}


# ----------------------
# Evaluator
# ----------------------
def evaluate(
    rule: FilterRule, fv: Optional[FieldValue], field: FieldDefinition
) -> bool:
    """
    Does one stored value pass one rule? Always answers with a bool.

    Operators a category does not understand pass, so a misconfigured rule
    shows extra records rather than hiding valid ones.
    """
    op = rule.operator
    category = category_of(field.type)

    if op == Op.is_empty:
        return _is_empty(fv, category)
    if op == Op.is_not_empty:
        return not _is_empty(fv, category)
    if op == Op.is_true:
        return fv is not None and fv.boolean_value is True
    if op == Op.is_false:
        return fv is None or not fv.boolean_value

    if fv is None:
        return False

    return _MATCHERS[category](op, fv, rule.value or "")


# ----------------------
# Combinator
# ----------------------
def passes_all(
    rules: Sequence[FilterRule],
    record_id: Hashable,
    values_index: ValuesIndex,
    fields_index: FieldsIndex,
) -> bool:
    if not rules:
        return True
    record_values = values_index.get(record_id) or {}
    for rule in rules:
        field = fields_index.get(rule.field_id)
        if field is None:
            # field deleted after the rule was saved; never hide records for it
            log.debug("rule %s skipped: field %s no longer exists", rule.id, rule.field_id)
            continue
        if not evaluate(rule, record_values.get(rule.field_id), field):
            return False
    return True


def filter_records(
    record_ids: Iterable[Hashable],
    rules: Sequence[FilterRule],
    values_index: ValuesIndex,
    fields_index: FieldsIndex,
) -> List[Hashable]:
    return [
        rid for rid in record_ids if passes_all(rules, rid, values_index, fields_index)
    ]


def build_values_index(values: Iterable[FieldValue]) -> Dict[Hashable, Dict[int, FieldValue]]:
    """
    record_id -> custom_field_id -> FieldValue, from a flat list of values.
    Values missing either id cannot be placed and are ignored.
    """
    index: Dict[Hashable, Dict[int, FieldValue]] = {}
    for v in values:
        if v.record_id is None or v.custom_field_id is None:
            continue
        index.setdefault(v.record_id, {})[v.custom_field_id] = v
    return index


def build_fields_index(fields: Iterable[FieldDefinition]) -> Dict[int, FieldDefinition]:
    return {f.id: f for f in fields}


# -----------------------------
# Rule building (filter panel)
# -----------------------------
def new_rule(fields: Sequence[FieldDefinition]) -> Optional[FilterRule]:
    if not fields:
        return None
    first = fields[0]
    ops = operators_for_type(first.type)
    return FilterRule(
        id=f"cf-{uuid4().hex[:12]}",
        field_id=first.id,
        operator=ops[0] if ops else Op.equals,
        value="",
    )


def change_rule_field(rule: FilterRule, field: FieldDefinition) -> FilterRule:
    ops = operators_for_type(field.type)
    return rule.model_copy(
        update={
            "field_id": field.id,
            "operator": ops[0] if ops else Op.equals,
            "value": "",
        }
    )


def change_rule_operator(rule: FilterRule, op: FilterOperator | str) -> FilterRule:
    op = FilterOperator(op)
    return rule.model_copy(
        update={"operator": op, "value": rule.value if operator_needs_value(op) else ""}
    )
