# File: /fieldview/schemas/custom_fields.py | Version: 1.0 | Title: Custom Field definitions, values and bulk payloads
from __future__ import annotations

import json
import math
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from fieldview.schemas._base import BaseSchema

RecordId = Union[int, str]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_datetime_adapter = TypeAdapter(datetime)
_date_adapter = TypeAdapter(date)
_tags_adapter = TypeAdapter(List[Any])


# ---- Parsing helpers ----


def to_epoch_ms(value: Any) -> Optional[int]:
    """
    Best-effort conversion to epoch milliseconds. Accepts epoch millis,
    datetime/date objects and ISO-8601 text; naive timestamps are UTC.
    Returns None for empty or unparsable input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            dt = _datetime_adapter.validate_python(text)
        except PydanticValidationError:
            try:
                d = _date_adapter.validate_python(text)
            except PydanticValidationError:
                return None
            dt = datetime(d.year, d.month, d.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def decode_tags(raw: Any) -> List[Any]:
    """
    Decode stored multiselect tags. Anything that is not a JSON array
    (or an already-decoded list) decodes to an empty list.
    """
    if not raw:
        return []
    if isinstance(raw, list):
        return raw
    try:
        return _tags_adapter.validate_json(raw)
    except (PydanticValidationError, TypeError, ValueError):
        return []


# ---- Custom Field Definition ----


class FieldType(str, Enum):
    text = "text"
    url = "url"
    email = "email"
    number = "number"
    currency = "currency"
    percent = "percent"
    rating = "rating"
    checkbox = "checkbox"
    date = "date"
    select = "select"
    multiselect = "multiselect"
    formula = "formula"  # derived, read-only
    rollup = "rollup"  # derived, read-only


class FieldOption(BaseSchema):
    label: str
    value: str
    color: Optional[str] = None


class FieldDefinition(BaseSchema):
    id: int
    name: str = Field(min_length=1, max_length=100)
    type: FieldType
    options: Optional[List[FieldOption]] = None
    project_id: Optional[int] = None

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, v: Any) -> Any:
        # Some stores keep the option list as JSON text
        if isinstance(v, (str, bytes)):
            try:
                v = json.loads(v)
            except ValueError:
                return None
            return v if isinstance(v, list) else None
        return v


# ---- Custom Field Value ----


class FieldValue(BaseSchema):
    """
    One record's value for one field. Only the channel matching the field's
    type is meaningful; the others stay None.
    """

    custom_field_id: Optional[int] = None
    record_id: Optional[RecordId] = None
    string_value: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("value", "stringValue", "string_value"),
        serialization_alias="value",
    )
    numeric_value: Optional[float] = None
    date_value: Optional[int] = None  # epoch millis
    boolean_value: Optional[bool] = None
    json_value: Optional[Union[List[Any], str]] = None  # raw tag storage

    @field_validator("numeric_value", mode="before")
    @classmethod
    def _blank_numeric(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("date_value", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> Any:
        if v is None or isinstance(v, int) and not isinstance(v, bool):
            return v
        ms = to_epoch_ms(v)
        if ms is None and str(v).strip():
            raise ValueError("date_value must be epoch millis, a datetime or ISO-8601 text")
        return ms


# ---- Bulk Edit ----

VALUE_CHANNELS = ("value", "numeric_value", "date_value", "boolean_value", "json_value")


class BulkEditPayload(BaseSchema):
    custom_field_id: int
    record_ids: List[RecordId] = Field(min_length=1)
    value: Optional[str] = None
    numeric_value: Optional[float] = None
    date_value: Optional[int] = None
    boolean_value: Optional[bool] = None
    json_value: Optional[List[str]] = None

    @model_validator(mode="after")
    def exactly_one_channel(self) -> "BulkEditPayload":
        supplied = [c for c in VALUE_CHANNELS if c in self.model_fields_set]
        if len(supplied) != 1:
            raise ValueError(
                f"Bulk edit payload must carry exactly one value channel, got {supplied or 'none'}"
            )
        return self

    @property
    def channel(self) -> str:
        return next(c for c in VALUE_CHANNELS if c in self.model_fields_set)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)
