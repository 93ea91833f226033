"""Mutation descriptors consumed by the JSON catalog store.

Repositories build these; only the store interprets them.  A descriptor
is a self-contained instruction: the operation, the table, the row key
and the column values to write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class _CommitTimestamp:
    """Placeholder the store replaces with the commit time."""

    def __repr__(self) -> str:
        return "COMMIT_TIMESTAMP"


COMMIT_TIMESTAMP = _CommitTimestamp()


class MutationOp(Enum):
    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class Mutation:
    """``expected`` holds column values the stored row must still carry
    for an update to apply; a mismatch means another writer got there first.
    """

    op: MutationOp
    table: str
    key: str
    values: dict[str, Any] = field(default_factory=dict)
    expected: dict[str, Any] = field(default_factory=dict)


def insert(table: str, key: str, values: dict[str, Any]) -> Mutation:
    return Mutation(MutationOp.INSERT, table, key, dict(values))


def update(
    table: str,
    key: str,
    values: dict[str, Any],
    expected: dict[str, Any] | None = None,
) -> Mutation:
    return Mutation(MutationOp.UPDATE, table, key, dict(values), dict(expected or {}))
