"""JSON-file-backed catalog store and atomic plan applier.

Both tables live in one JSON document so that a plan touching a product
row and its outbox rows can be committed with a single atomic file
replace: the new document is written to a temp file in the same
directory and renamed over the old one.  A reader sees either the
document before the plan or the document after it, never a mix.

Writers in other processes are excluded with ``fcntl.flock`` on a
sidecar ``.lock`` file held from load to replace, so no commit can be
overwritten by one that started from an older document.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from catalog.application.commit_plan import Applier, Plan
from catalog.domain.clock import Clock, SystemClock
from catalog.domain.exceptions import ConcurrencyConflictError, StorageUnavailableError
from catalog.infrastructure.persistence.mutations import COMMIT_TIMESTAMP, Mutation, MutationOp
from catalog.infrastructure.persistence.schema import TABLES, OutboxTable

logger = logging.getLogger(__name__)


class JsonCatalogStore(Applier):

    def __init__(self, file_path: Path, clock: Clock | None = None) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._ensure_file()

    # --- Applier interface ----------------------------------------------------

    def apply(self, plan: Plan) -> None:
        """Apply every mutation in ``plan`` or none of them.

        Mutations are validated against a working copy of the document;
        the file is only replaced once all of them succeeded.
        """
        with self._exclusive():
            document = self._load()
            commit_time = self._clock.now()
            for mutation in plan:
                self._apply_one(document, mutation, commit_time)
            self._persist(document)
        logger.debug("Applied plan of %d mutation(s) to %s", len(plan), self._file_path)

    # --- Reads ----------------------------------------------------------------

    def get_row(self, table: str, key: str) -> dict[str, Any] | None:
        row = self._load()[table].get(key)
        return dict(row) if row is not None else None

    def rows(self, table: str) -> list[dict[str, Any]]:
        return [dict(row) for row in self._load()[table].values()]

    def pending_events(self) -> list[dict[str, Any]]:
        """Outbox rows not yet relayed, oldest first."""
        return [
            row
            for row in self.rows(OutboxTable.NAME)
            if row[OutboxTable.STATUS] == OutboxTable.STATUS_PENDING
        ]

    # --- Mutation helpers -----------------------------------------------------

    @staticmethod
    def _apply_one(document: dict, mutation: Mutation, commit_time: datetime) -> None:
        if not isinstance(mutation, Mutation):
            raise TypeError(f"Unsupported mutation descriptor: {type(mutation).__name__}")
        if mutation.table not in document:
            raise ValueError(f"Unknown table '{mutation.table}'")

        table = document[mutation.table]
        values = {
            column: _encode(value, commit_time) for column, value in mutation.values.items()
        }

        if mutation.op is MutationOp.INSERT:
            if mutation.key in table:
                raise ConcurrencyConflictError(
                    f"Row '{mutation.key}' already exists in {mutation.table}",
                    value=mutation.key,
                )
            table[mutation.key] = values
            return

        current = table.get(mutation.key)
        if current is None:
            raise ConcurrencyConflictError(
                f"Row '{mutation.key}' no longer exists in {mutation.table}",
                value=mutation.key,
            )
        for column, expected in mutation.expected.items():
            if current.get(column) != _encode(expected, commit_time):
                raise ConcurrencyConflictError(
                    f"Row '{mutation.key}' in {mutation.table} was modified concurrently "
                    f"({column} is {current.get(column)!r}, expected {expected!r})",
                    value=mutation.key,
                )
        table[mutation.key] = {**current, **values}

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        """Hold both the in-process lock and the cross-process file lock."""
        with self._lock:
            try:
                handle = open(self._lock_path, "a")
            except OSError as exc:
                raise StorageUnavailableError(
                    f"Cannot open lock file {self._lock_path}: {exc}"
                ) from exc
            with handle:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def _load(self) -> dict[str, dict[str, dict[str, Any]]]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailableError(
                f"Cannot read catalog store {self._file_path}: {exc}"
            ) from exc
        for table in TABLES:
            raw.setdefault(table, {})
        return raw

    def _persist(self, document: dict) -> None:
        text = json.dumps(document, indent=2) + "\n"
        tmp_name = None
        replaced = False
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self._file_path.parent, suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._file_path)
            replaced = True
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot write catalog store {self._file_path}: {exc}"
            ) from exc
        finally:
            if not replaced and tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _ensure_file(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(
                f"Cannot create data directory {self._file_path.parent}: {exc}"
            ) from exc
        with self._exclusive():
            if not self._file_path.exists():
                self._persist({table: {} for table in TABLES})


def _encode(value: Any, commit_time: datetime) -> Any:
    if value is COMMIT_TIMESTAMP:
        return commit_time.isoformat()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value
