"""
bidboard.admin.mutations

Value objects for administrative deletions.

Responsibilities:
- `PendingMutation`: user intent to delete one row or the table's selection.
- `RowCollection`: immutable in-memory rows of one table, reconciled after deletes.
- `CommitOutcome`: rows after reconciliation plus the ids the store deleted.
- `MutationError`: failure value returned by the executor.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


class MutationKind(enum.StrEnum):
    single = "SINGLE"
    batch = "BATCH"


@dataclass(frozen=True, slots=True)
class PendingMutation:
    """
    A batch mutation carries no ids: they are read from the selection at commit time.
    """

    kind: MutationKind
    table: str
    row_id: str | None = None
    label: str | None = None

    @classmethod
    def single(cls, table: str, row_id: str, *, label: str | None = None) -> PendingMutation:
        return cls(kind=MutationKind.single, table=table, row_id=row_id, label=label)

    @classmethod
    def batch(cls, table: str) -> PendingMutation:
        return cls(kind=MutationKind.batch, table=table)

    def __post_init__(self) -> None:
        if self.kind == MutationKind.single and not self.row_id:
            raise ValueError("single mutation requires a row id")


class MutationErrorKind(enum.StrEnum):
    mutation_failed = "MUTATION_FAILED"
    already_in_flight = "ALREADY_IN_FLIGHT"


@dataclass(frozen=True, slots=True)
class MutationError:
    kind: MutationErrorKind
    message: str
    table: str


@dataclass(frozen=True, slots=True)
class RowCollection:
    table: str
    rows: tuple[Mapping[str, Any], ...] = ()

    @classmethod
    def of(cls, table: str, rows: Iterable[Mapping[str, Any]]) -> RowCollection:
        return cls(table=table, rows=tuple(rows))

    def __len__(self) -> int:
        return len(self.rows)

    def ids(self) -> list[str]:
        return [str(r["id"]) for r in self.rows]

    def get(self, row_id: str) -> Mapping[str, Any] | None:
        for r in self.rows:
            if str(r["id"]) == row_id:
                return r
        return None

    def without(self, ids: Iterable[str]) -> RowCollection:
        drop = frozenset(ids)
        return RowCollection(self.table, tuple(r for r in self.rows if str(r["id"]) not in drop))


@dataclass(frozen=True, slots=True)
class CommitOutcome:
    rows: RowCollection
    deleted: frozenset[str]
