# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "fieldview"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Dict, List, Optional

import pytest

from fieldview.crud.filtering import build_fields_index
from fieldview.schemas.custom_fields import BulkEditPayload, FieldDefinition, FieldType
from fieldview.schemas.view import SavedView

# (id, name, type) - one custom field per type
FIELD_SPECS = [
    (1, "Notes", FieldType.text),
    (2, "Budget", FieldType.number),
    (3, "Due", FieldType.date),
    (4, "Done", FieldType.checkbox),
    (5, "Team", FieldType.select),
    (6, "Labels", FieldType.multiselect),
    (7, "Score", FieldType.rating),
    (8, "Margin", FieldType.formula),
    (9, "Spent", FieldType.rollup),
    (10, "Site", FieldType.url),
    (11, "Contact", FieldType.email),
    (12, "Cost", FieldType.currency),
    (13, "Progress", FieldType.percent),
]


class InMemorySavedViewStore:
    """Dict-backed stand-in for the saved view storage collaborator."""

    def __init__(self):
        self.rows: Dict[int, SavedView] = {}
        self.writes = 0
        self._next_id = 1

    def insert(self, view: SavedView) -> SavedView:
        view = view.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self.rows[view.id] = view
        self.writes += 1
        return view

    def get(self, view_id: int) -> Optional[SavedView]:
        return self.rows.get(view_id)

    def save(self, view: SavedView) -> SavedView:
        self.rows[view.id] = view
        self.writes += 1
        return view

    def delete(self, view_id: int) -> bool:
        return self.rows.pop(view_id, None) is not None

    def list_for_project(self, project_id: int, user_id: Optional[int]) -> List[SavedView]:
        return [
            v
            for v in self.rows.values()
            if v.project_id == project_id and v.user_id == user_id
        ]


class RecordingValueStore:
    def __init__(self):
        self.payloads: List[BulkEditPayload] = []

    def bulk_set_value(self, payload: BulkEditPayload) -> int:
        self.payloads.append(payload)
        return len(payload.record_ids)


@pytest.fixture()
def fields() -> Dict[FieldType, FieldDefinition]:
    out = {}
    for fid, name, ftype in FIELD_SPECS:
        options = None
        if ftype in (FieldType.select, FieldType.multiselect):
            options = [{"label": x.title(), "value": x} for x in ("tag1", "tag2", "tag3")]
        out[ftype] = FieldDefinition(id=fid, name=name, type=ftype, options=options)
    return out


@pytest.fixture()
def fields_index(fields):
    return build_fields_index(fields.values())


@pytest.fixture()
def view_store():
    return InMemorySavedViewStore()


@pytest.fixture()
def value_store():
    return RecordingValueStore()
