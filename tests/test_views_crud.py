# File: /tests/test_views_crud.py | Version: 3.0 | Title: Saved Views lifecycle against an in-memory store
from __future__ import annotations

from typing import Any, Dict

import pytest

from fieldview.core.errors import ValidationError
from fieldview.crud.view import (
    create_view,
    delete_view,
    get_view,
    list_views,
    set_default_view,
    update_view,
    view_filter_rules,
)
from fieldview.schemas.view import SavedViewUpdate, ViewType


def _payload(**overrides) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "projectId": 7,
        "name": "Open bugs",
        "viewType": "table",
        "config": {
            "sortField": "priority",
            "customFieldFilters": [
                {"id": "cf-1", "fieldId": 5, "operator": "equals", "value": "tag1"}
            ],
        },
    }
    data.update(overrides)
    return data


def test_views_crud_lifecycle(view_store):
    # --- Create ---
    view = create_view(view_store, user_id=42, data=_payload(icon="", color="#f00"))
    assert view.id is not None
    assert view.user_id == 42
    assert view.view_type is ViewType.table
    assert view.is_default is False
    assert view.icon is None
    assert view.color == "#f00"
    assert [r.field_id for r in view_filter_rules(view)] == [5]

    # --- Get / list ---
    assert get_view(view_store, view.id) == view
    assert [v.id for v in list_views(view_store, project_id=7, user_id=42)] == [view.id]
    assert list_views(view_store, project_id=7, user_id=99) == []

    # --- Update ---
    renamed = update_view(view_store, {"id": view.id, "name": "Renamed"})
    assert renamed.name == "Renamed"
    assert renamed.config.sort_field == "priority"

    # --- Delete ---
    assert delete_view(view_store, {"id": view.id}) == {"deleted": True}
    assert get_view(view_store, view.id) is None
    assert delete_view(view_store, {"id": view.id}) == {"deleted": False}


def test_update_replaces_config_wholesale(view_store):
    view = create_view(view_store, user_id=1, data=_payload())
    updated = update_view(
        view_store, SavedViewUpdate(id=view.id, config={"groupBy": "status"})
    )
    assert updated.config.group_by == "status"
    assert updated.config.sort_field is None
    assert view_filter_rules(updated) == []
    assert updated.name == "Open bugs"


def test_update_ignores_explicit_nulls(view_store):
    view = create_view(view_store, user_id=1, data=_payload(icon="star"))
    updated = update_view(view_store, {"id": view.id, "icon": None, "name": None})
    assert updated.icon == "star"
    assert updated.name == "Open bugs"


def test_update_unknown_view_returns_none(view_store):
    writes = view_store.writes
    assert update_view(view_store, {"id": 404, "name": "X"}) is None
    assert view_store.writes == writes


def test_set_default_moves_the_flag(view_store):
    a = create_view(view_store, user_id=1, data=_payload(name="A"))
    b = create_view(view_store, user_id=1, data=_payload(name="B"))
    other = create_view(view_store, user_id=1, data=_payload(name="Elsewhere", projectId=8))

    assert set_default_view(view_store, user_id=1, data={"id": a.id, "projectId": 7}) == {"success": True}
    set_default_view(view_store, user_id=1, data={"id": other.id, "projectId": 8})
    set_default_view(view_store, user_id=1, data={"id": b.id, "projectId": 7})

    assert get_view(view_store, a.id).is_default is False
    assert get_view(view_store, b.id).is_default is True
    assert get_view(view_store, other.id).is_default is True


def test_set_default_zero_clears_project_default(view_store):
    a = create_view(view_store, user_id=1, data=_payload())
    set_default_view(view_store, user_id=1, data={"id": a.id, "projectId": 7})
    set_default_view(view_store, user_id=1, data={"id": 0, "projectId": 7})
    assert not any(v.is_default for v in list_views(view_store, project_id=7, user_id=1))


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"name": "x" * 101},
        {"viewType": "timeline"},
        {"config": {"sortDirection": "sideways"}},
        {"config": {"customFieldFilters": [{"id": "r", "operator": "equals", "value": ""}]}},
    ],
)
def test_invalid_create_writes_nothing(view_store, overrides):
    with pytest.raises(ValidationError) as exc:
        create_view(view_store, user_id=1, data=_payload(**overrides))
    assert view_store.writes == 0
    body = exc.value.to_dict()
    assert body["error"]["code"] == "UNPROCESSABLE_ENTITY"
    assert body["error"]["message"] == "Invalid saved view"
    assert body["error"]["details"]


def test_invalid_update_leaves_view_untouched(view_store):
    view = create_view(view_store, user_id=1, data=_payload())
    writes = view_store.writes
    with pytest.raises(ValidationError):
        update_view(view_store, {"id": view.id, "config": {"calendarMode": "year"}})
    assert view_store.writes == writes
    assert get_view(view_store, view.id).config.sort_field == "priority"
