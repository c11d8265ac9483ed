# File: /fieldview/crud/bulk_edit.py | Version: 1.0 | Title: Bulk custom-field edit (one typed payload per field)
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fieldview.core.errors import FieldNotEditableError
from fieldview.core.field_types import FieldCategory, category_of, is_editable
from fieldview.schemas.custom_fields import (
    BulkEditPayload,
    FieldDefinition,
    RecordId,
    decode_tags,
    to_epoch_ms,
)

log = logging.getLogger(__name__)

_bool_adapter = TypeAdapter(bool)


class CustomFieldValueStore(Protocol):
    def bulk_set_value(self, payload: BulkEditPayload) -> int:
        """Apply one payload to every record it names; returns the updated count."""
        ...


# ----------------------
# Raw input coercion
# ----------------------
def _text_input(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw)
    return text or None


def _numeric_input(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else None
    text = str(raw).strip()
    if not text:
        return None
    try:
        n = float(text)
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def _boolean_input(raw: Any) -> bool:
    # text such as "false" or "0" parses; anything unparsable is False
    try:
        return _bool_adapter.validate_python(raw)
    except PydanticValidationError:
        return False


def _tags_input(raw: Any) -> Optional[List[str]]:
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        raw = decode_tags(text) if text.startswith("[") else [text]
    if not isinstance(raw, (list, tuple)):
        return None
    tags = [str(t) for t in raw]
    return tags or None


# ----------------------
# Dispatcher
# ----------------------
def build_payload(
    field: FieldDefinition, record_ids: Sequence[RecordId], raw_input: Any
) -> BulkEditPayload:
    """
    One payload carrying exactly one value channel, picked by field type.
    Clearing values are None; an empty multiselect choice clears too.
    """
    if not is_editable(field.type):
        raise FieldNotEditableError(field.id, field.type.value)

    base: Dict[str, Any] = {
        "custom_field_id": field.id,
        "record_ids": list(record_ids),
    }
    category = category_of(field.type)

    if category in (FieldCategory.TEXT, FieldCategory.SELECT):
        base["value"] = _text_input(raw_input)
    elif category == FieldCategory.NUMERIC:
        base["numeric_value"] = _numeric_input(raw_input)
    elif category == FieldCategory.DATE:
        base["date_value"] = to_epoch_ms(raw_input)
    elif category == FieldCategory.BOOLEAN:
        base["boolean_value"] = _boolean_input(raw_input)
    elif category == FieldCategory.MULTISELECT:
        base["json_value"] = _tags_input(raw_input)

    return BulkEditPayload(**base)


def apply_bulk_edit(
    store: CustomFieldValueStore,
    *,
    field_id: Optional[int],
    record_ids: Iterable[RecordId],
    raw_input: Any,
    fields_index: Mapping[int, FieldDefinition],
) -> Optional[int]:
    """
    Returns the store's updated count, or None when nothing was dispatched
    (no field chosen, no records selected, unknown or read-only field).
    """
    ids = list(record_ids)
    if field_id is None or not ids:
        log.debug("bulk edit skipped: field=%s records=%d", field_id, len(ids))
        return None
    field = fields_index.get(field_id)
    if field is None or not is_editable(field.type):
        log.debug("bulk edit skipped: field %s missing or read-only", field_id)
        return None

    payload = build_payload(field, ids, raw_input)
    updated = store.bulk_set_value(payload)
    log.info(
        "bulk edit on field %s (%s) applied to %s record(s)",
        field.id,
        payload.channel,
        updated,
    )
    return updated


# -----------------------------
# Value-selection helpers
# -----------------------------
def toggle_rating(current: Optional[float], clicked: float) -> Optional[float]:
    # clicking the set star clears, any other star replaces
    return None if current == clicked else clicked


def toggle_option(current: Sequence[str], option: str, checked: bool) -> List[str]:
    if checked:
        return list(current) if option in current else [*current, option]
    return [v for v in current if v != option]


class BulkEditDraft:
    """
    Input state of the bulk edit popover. Choosing another field discards
    whatever was typed for the previous one.
    """

    def __init__(self) -> None:
        self.field_id: Optional[int] = None
        self.reset_inputs()

    def reset_inputs(self) -> None:
        self.text: str = ""
        self.number: Optional[float] = None
        self.checked: bool = False
        self.date: str = ""
        self.options: List[str] = []

    def choose_field(self, field_id: Optional[int]) -> None:
        self.field_id = field_id
        self.reset_inputs()

    def click_rating(self, star: float) -> None:
        self.number = toggle_rating(self.number, star)

    def set_option(self, option: str, checked: bool) -> None:
        self.options = toggle_option(self.options, option, checked)

    def raw_input_for(self, field: FieldDefinition) -> Any:
        category = category_of(field.type)
        if category == FieldCategory.NUMERIC:
            return self.number
        if category == FieldCategory.DATE:
            return self.date
        if category == FieldCategory.BOOLEAN:
            return self.checked
        if category == FieldCategory.MULTISELECT:
            return list(self.options)
        return self.text

    def apply(
        self,
        store: CustomFieldValueStore,
        record_ids: Iterable[RecordId],
        fields_index: Mapping[int, FieldDefinition],
    ) -> Optional[int]:
        field = fields_index.get(self.field_id) if self.field_id is not None else None
        return apply_bulk_edit(
            store,
            field_id=self.field_id,
            record_ids=record_ids,
            raw_input=self.raw_input_for(field) if field is not None else None,
            fields_index=fields_index,
        )
