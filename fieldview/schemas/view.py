# File: /fieldview/schemas/view.py | Version: 1.0 | Title: Pydantic v2 schemas for Saved Views (config bundle + mutations)
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from fieldview.schemas._base import BaseSchema
from fieldview.schemas.filters import FilterRule

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100


class ViewType(str, Enum):
    table = "table"
    kanban = "kanban"
    calendar = "calendar"
    gantt = "gantt"
    all = "all"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class CalendarMode(str, Enum):
    month = "month"
    week = "week"


class KanbanFilters(BaseSchema):
    priority: Optional[str] = None
    assignee: Optional[int] = None
    tag: Optional[int] = None


class SavedViewConfig(BaseSchema):
    """
    Filter/sort/grouping state of one view. Every key is optional and an
    empty config is valid; keys that were never set are left out when the
    config is encoded.
    """

    view_type: Optional[str] = None
    sort_field: Optional[str] = None
    sort_direction: Optional[SortDirection] = None
    group_by: Optional[str] = None
    search_query: Optional[str] = None
    kanban_filters: Optional[KanbanFilters] = None
    custom_field_filters: Optional[List[FilterRule]] = None
    calendar_mode: Optional[CalendarMode] = None
    gantt_zoom: Optional[str] = None

    @field_validator(
        "view_type",
        "sort_direction",
        "group_by",
        "search_query",
        "kanban_filters",
        "custom_field_filters",
        "calendar_mode",
        "gantt_zoom",
        mode="before",
    )
    @classmethod
    def _no_explicit_null(cls, v):
        # only sortField may be sent as null; the others are omitted instead
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# ---- Mutations ----


class SavedViewCreate(BaseSchema):
    project_id: int
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    view_type: ViewType = ViewType.all
    config: SavedViewConfig
    icon: Optional[str] = None
    color: Optional[str] = None


class SavedViewUpdate(BaseSchema):
    id: int
    name: Optional[str] = Field(default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    config: Optional[SavedViewConfig] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class SavedViewSetDefault(BaseSchema):
    id: int = Field(ge=0, description="0 clears the project's default view")
    project_id: int


class SavedViewDelete(BaseSchema):
    id: int


# ---- Persisted wrapper ----


class SavedView(BaseSchema):
    id: Optional[int] = None  # assigned by the store on insert
    project_id: int
    user_id: Optional[int] = None
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    view_type: ViewType = ViewType.all
    config: SavedViewConfig = Field(default_factory=SavedViewConfig)
    icon: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
    sort_order: int = 0
