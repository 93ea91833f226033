"""Dirty-field tracking for the Product aggregate.

Repositories read the tracker to build update mutations that touch only
the columns that actually changed since the aggregate was loaded.
"""

from __future__ import annotations

import threading
from enum import Enum


class Field(Enum):
    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    BASE_PRICE = "base_price"
    STATUS = "status"
    DISCOUNT = "discount"


class ChangeTracker:
    """Set of dirty fields owned by one aggregate instance.

    Guarded by a lock so the aggregate can be observed (e.g. logged) while
    a use case mutates it.  Its lifetime is the aggregate's lifetime; it is
    never shared between requests.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._dirty: set[Field] = set()

    def mark_dirty(self, field: Field) -> None:
        with self._lock:
            self._dirty.add(field)

    def is_dirty(self, field: Field) -> bool:
        with self._lock:
            return field in self._dirty

    def dirty_fields(self) -> frozenset[Field]:
        """Snapshot of the fields marked so far."""
        with self._lock:
            return frozenset(self._dirty)

    def clear(self) -> None:
        with self._lock:
            self._dirty.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._dirty)

    def __repr__(self) -> str:
        names = sorted(f.value for f in self.dirty_fields())
        return f"ChangeTracker(dirty={names})"
