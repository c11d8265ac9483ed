# File: /fieldview/crud/view.py | Version: 1.0 | Title: Saved View operations (validate -> hand to store) + config codec
from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fieldview.core.errors import ValidationError
from fieldview.schemas.filters import FilterRule
from fieldview.schemas.view import (
    SavedView,
    SavedViewConfig,
    SavedViewCreate,
    SavedViewDelete,
    SavedViewSetDefault,
    SavedViewUpdate,
)

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SavedViewStore(Protocol):
    """Storage collaborator for saved views. Implementations own ids and transactions."""

    def insert(self, view: SavedView) -> SavedView: ...

    def get(self, view_id: int) -> Optional[SavedView]: ...

    def save(self, view: SavedView) -> SavedView: ...

    def delete(self, view_id: int) -> bool: ...

    def list_for_project(self, project_id: int, user_id: Optional[int]) -> List[SavedView]: ...


def _validate(schema: Type[M], data: Union[M, dict, Any], what: str) -> M:
    if isinstance(data, schema):
        return data
    try:
        if isinstance(data, dict):
            return schema.model_validate(data)
        return schema.model_validate(data, from_attributes=True)
    except PydanticValidationError as e:
        log.info("rejected %s: %d error(s)", what, e.error_count())
        raise ValidationError.from_pydantic(e, what) from e


# ---- Config codec ----


def validate_config(data: Union[SavedViewConfig, dict]) -> SavedViewConfig:
    return _validate(SavedViewConfig, data, "view config")


def encode_config(config: Union[SavedViewConfig, dict]) -> str:
    """
    JSON text of a config. Only keys that were set are written, so
    decode_config(encode_config(c)) gives back exactly the same keys.
    """
    config = validate_config(config)
    return config.model_dump_json(by_alias=True, exclude_unset=True)


def decode_config(text: Union[str, bytes]) -> SavedViewConfig:
    try:
        return SavedViewConfig.model_validate_json(text)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, "view config") from e


def config_to_dict(config: SavedViewConfig) -> dict:
    return config.model_dump(by_alias=True, exclude_unset=True, mode="json")


def view_filter_rules(view: SavedView) -> List[FilterRule]:
    return list(view.config.custom_field_filters or [])


# ---- CRUD ----


def create_view(store: SavedViewStore, *, user_id: Optional[int], data) -> SavedView:
    data = _validate(SavedViewCreate, data, "saved view")
    view = SavedView(
        project_id=data.project_id,
        user_id=user_id,
        name=data.name,
        view_type=data.view_type,
        config=data.config,
        icon=data.icon or None,
        color=data.color or None,
        is_default=False,
        sort_order=0,
    )
    created = store.insert(view)
    log.info("saved view %s created in project %s", created.id, created.project_id)
    return created


def get_view(store: SavedViewStore, view_id: int) -> Optional[SavedView]:
    return store.get(view_id)


def list_views(
    store: SavedViewStore, *, project_id: int, user_id: Optional[int]
) -> List[SavedView]:
    return sorted(
        store.list_for_project(project_id, user_id), key=lambda v: v.sort_order
    )


def apply_view_update(view: SavedView, data: SavedViewUpdate) -> SavedView:
    """
    Field-level replace-if-present. A supplied config replaces the stored
    one as a whole; it is never merged with it.
    """
    changes = {}
    for name in ("name", "config", "icon", "color"):
        if name in data.model_fields_set and getattr(data, name) is not None:
            changes[name] = getattr(data, name)
    return view.model_copy(update=changes)


def update_view(store: SavedViewStore, data) -> Optional[SavedView]:
    data = _validate(SavedViewUpdate, data, "saved view update")
    current = store.get(data.id)
    if current is None:
        log.info("saved view %s not found for update", data.id)
        return None
    return store.save(apply_view_update(current, data))


def set_default_view(store: SavedViewStore, *, user_id: Optional[int], data) -> dict:
    data = _validate(SavedViewSetDefault, data, "default view selection")
    for v in store.list_for_project(data.project_id, user_id):
        if v.is_default:
            store.save(v.model_copy(update={"is_default": False}))
    if data.id > 0:
        target = store.get(data.id)
        if target is not None:
            store.save(target.model_copy(update={"is_default": True}))
    return {"success": True}


def delete_view(store: SavedViewStore, data) -> dict:
    data = _validate(SavedViewDelete, data, "saved view delete")
    return {"deleted": bool(store.delete(data.id))}
