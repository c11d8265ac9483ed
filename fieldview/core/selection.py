# File: /fieldview/core/selection.py | Version: 1.0 | Title: In-memory record selection for bulk actions
from __future__ import annotations

from typing import Hashable, Iterable, List, Optional, Set


class Selection:
    """
    Ids of the records currently selected in one viewing session.
    Only ids are kept; the records themselves belong to the caller.
    """

    def __init__(self, initial: Optional[Iterable[Hashable]] = None) -> None:
        self._ids: Set[Hashable] = set(initial or ())

    # ---- queries ----

    def is_selected(self, record_id: Hashable) -> bool:
        return record_id in self._ids

    def all_selected(self, record_ids: Iterable[Hashable]) -> bool:
        ids = list(record_ids)
        return bool(ids) and all(i in self._ids for i in ids)

    @property
    def ids(self) -> List[Hashable]:
        return list(self._ids)

    @property
    def count(self) -> int:
        return len(self._ids)

    @property
    def has_selection(self) -> bool:
        return bool(self._ids)

    def __contains__(self, record_id: Hashable) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    # ---- mutations ----

    def toggle(self, record_id: Hashable) -> None:
        if record_id in self._ids:
            self._ids.discard(record_id)
        else:
            self._ids.add(record_id)

    def toggle_all(self, record_ids: Iterable[Hashable]) -> None:
        ids = list(record_ids)
        if all(i in self._ids for i in ids):
            self.clear()
        else:
            self._ids = set(ids)

    def select_all(self, record_ids: Iterable[Hashable]) -> None:
        self._ids = set(record_ids)

    def clear(self) -> None:
        self._ids = set()
