"""
bidboard.admin.viewer

Administrative viewer sessions over the raw `profiles` / `auctions` rows.

Responsibilities:
- Gate access through an injected `AdminAuthenticator` (one session per admin subject).
- Load rows, drive selections, and hold the pending deletion until confirm/cancel.
- Report the outcome of the last delete as a status message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bidboard.admin.executor import BulkMutationExecutor
from bidboard.admin.mutations import MutationError, PendingMutation, RowCollection
from bidboard.admin.selection import AdminSelections, SelectionSet
from bidboard.auth.admin import AdminAuthenticator
from bidboard.auth.models import Principal
from bidboard.domain import ADMIN_TABLES, AUCTIONS, PROFILES
from bidboard.observability.logging import get_logger
from bidboard.result import Err, Ok, Result
from bidboard.store.base import RemoteStore, StoreError

log = get_logger(__name__)

DELETE_SUCCEEDED_MESSAGE = "Records deleted successfully"


class UnknownRowError(LookupError):
    pass


@dataclass(frozen=True, slots=True)
class DeleteStatus:
    success: bool
    message: str


@dataclass(frozen=True, slots=True)
class ViewerSnapshot:
    rows: dict[str, RowCollection]
    selections: dict[str, SelectionSet]
    pending: PendingMutation | None
    status: DeleteStatus | None
    error: str | None


class AdminViewer:
    def __init__(
        self,
        *,
        principal: Principal,
        store: RemoteStore,
        executor: BulkMutationExecutor,
    ) -> None:
        self.principal = principal
        self._store = store
        self._executor = executor
        self._rows = {t: RowCollection(t) for t in ADMIN_TABLES}
        self._selections = AdminSelections(ADMIN_TABLES)
        self._pending: PendingMutation | None = None
        self._status: DeleteStatus | None = None
        self._error: str | None = None

    def rows(self, table: str) -> RowCollection:
        _check_table(table)
        return self._rows[table]

    @property
    def pending(self) -> PendingMutation | None:
        return self._pending

    async def refresh(self) -> Result[None, str]:
        """
        Reload both tables newest-first. On failure earlier rows are kept.
        """

        self._error = None
        loaded: dict[str, RowCollection] = {}
        for table in ADMIN_TABLES:
            try:
                rows = await self._store.select(table, order_by="created_at", descending=True)
            except StoreError as e:
                log.warning("viewer_refresh_failed", table=table, error=str(e))
                self._error = str(e)
                return Err(self._error)
            loaded[table] = RowCollection.of(table, rows)
        self._rows.update(loaded)
        return Ok(None)

    def toggle(self, table: str, row_id: str) -> SelectionSet:
        _check_table(table)
        return self._selections[table].toggle(row_id)

    def toggle_all(self, table: str) -> SelectionSet:
        _check_table(table)
        return self._selections[table].select_all(self._rows[table].ids())

    def clear(self, table: str) -> SelectionSet:
        _check_table(table)
        return self._selections[table].clear()

    def request_delete(self, table: str, row_id: str) -> PendingMutation:
        _check_table(table)
        row = self._rows[table].get(row_id)
        if row is None:
            raise UnknownRowError(f"{table} row {row_id} is not loaded")
        self._pending = PendingMutation.single(table, row_id, label=_label(table, row))
        return self._pending

    def request_delete_selected(self, table: str) -> PendingMutation:
        _check_table(table)
        self._pending = PendingMutation.batch(table)
        return self._pending

    def cancel(self) -> None:
        self._pending = None

    async def confirm(self) -> Result[RowCollection, MutationError] | None:
        """
        Commit the pending deletion. Returns None when nothing is pending.

        A failed commit keeps the pending mutation so it can be confirmed again.
        The deleted ids are applied to the rows held when the commit returns, so a
        refresh that landed during the delete is kept.
        """

        pending = self._pending
        if pending is None:
            return None

        table = pending.table
        result = await self._executor.commit(pending, self._selections[table], self._rows[table])
        if isinstance(result, Err):
            self._status = DeleteStatus(success=False, message=result.error.message)
            log.info(
                "viewer_delete_confirmed", subject=self.principal.subject, table=table, success=False
            )
            return result

        self._rows[table] = self._rows[table].without(result.value.deleted)
        self._pending = None
        self._status = DeleteStatus(success=True, message=DELETE_SUCCEEDED_MESSAGE)
        log.info(
            "viewer_delete_confirmed", subject=self.principal.subject, table=table, success=True
        )
        return Ok(self._rows[table])

    def snapshot(self) -> ViewerSnapshot:
        return ViewerSnapshot(
            rows=dict(self._rows),
            selections=self._selections.snapshot(),
            pending=self._pending,
            status=self._status,
            error=self._error,
        )


class AdminViewerRegistry:
    """
    One viewer per admin subject; all viewers share one executor so the
    in-flight guard holds per table across sessions.
    """

    def __init__(
        self,
        *,
        store: RemoteStore,
        authenticator: AdminAuthenticator,
        executor: BulkMutationExecutor | None = None,
    ) -> None:
        self._store = store
        self._authenticator = authenticator
        self._executor = executor or BulkMutationExecutor(store=store)
        self._viewers: dict[str, AdminViewer] = {}

    async def open(self, credential: str) -> AdminViewer:
        # Raises AdminAccessDenied for rejected credentials.
        principal = await self._authenticator.authenticate(credential)
        return self.for_principal(principal)

    def for_principal(self, principal: Principal) -> AdminViewer:
        viewer = self._viewers.get(principal.subject)
        if viewer is None:
            viewer = AdminViewer(principal=principal, store=self._store, executor=self._executor)
            self._viewers[principal.subject] = viewer
            log.info("viewer_opened", subject=principal.subject)
        return viewer

    def close(self, subject: str) -> None:
        self._viewers.pop(subject, None)


def _check_table(table: str) -> None:
    if table not in ADMIN_TABLES:
        raise KeyError(f"unknown table: {table}")


def _label(table: str, row: Any) -> str | None:
    if table == PROFILES:
        return row.get("name")
    if table == AUCTIONS:
        return row.get("title")
    return None


# --- Module Notes -----------------------------------------------------------
# Sessions live in process memory; a restart drops selections and pending deletes,
# which only ever represent un-issued intent.
