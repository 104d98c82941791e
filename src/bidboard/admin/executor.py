"""
bidboard.admin.executor

Commits pending deletions against the remote store and reconciles local state.

Responsibilities:
- Enforce at most one in-flight commit per table (busy flag, no queueing).
- Issue exactly one remote delete per commit.
- Reconcile rows and selection only after the store acknowledges the delete.
"""

from __future__ import annotations

from bidboard.admin.mutations import (
    CommitOutcome,
    MutationError,
    MutationErrorKind,
    MutationKind,
    PendingMutation,
    RowCollection,
)
from bidboard.admin.selection import SelectionController
from bidboard.observability.logging import get_logger
from bidboard.result import Err, Ok, Result
from bidboard.store.base import RemoteStore, StoreError

log = get_logger(__name__)


class BulkMutationExecutor:
    def __init__(self, *, store: RemoteStore) -> None:
        self._store = store
        self._in_flight: set[str] = set()

    def is_busy(self, table: str) -> bool:
        return table in self._in_flight

    async def commit(
        self,
        pending: PendingMutation,
        selection: SelectionController,
        rows: RowCollection,
    ) -> Result[CommitOutcome, MutationError]:
        table = pending.table
        if selection.table != table or rows.table != table:
            raise ValueError(
                f"mutation for {table!r} given selection {selection.table!r} / rows {rows.table!r}"
            )

        # Checked and set before the first await, so a back-to-back commit sees it.
        if table in self._in_flight:
            log.info("mutation_rejected", table=table, reason="already_in_flight")
            return Err(
                MutationError(
                    kind=MutationErrorKind.already_in_flight,
                    message=f"A delete for {table} is already in progress",
                    table=table,
                )
            )

        self._in_flight.add(table)
        try:
            if pending.kind == MutationKind.single:
                assert pending.row_id is not None
                ids = frozenset({pending.row_id})
                await self._store.delete_by_id(table, pending.row_id)
            else:
                ids = selection.snapshot().ids
                if ids:
                    await self._store.delete_by_ids(table, sorted(ids))
        except StoreError as e:
            log.warning("mutation_failed", table=table, kind=str(pending.kind), error=str(e))
            return Err(
                MutationError(kind=MutationErrorKind.mutation_failed, message=str(e), table=table)
            )
        finally:
            self._in_flight.discard(table)

        if pending.kind == MutationKind.single:
            selection.discard(ids)
        else:
            selection.clear()
        updated = rows.without(ids)
        log.info(
            "mutation_committed",
            table=table,
            kind=str(pending.kind),
            deleted=len(ids),
            remaining=len(updated),
        )
        return Ok(CommitOutcome(rows=updated, deleted=ids))
