"""
bidboard.admin.selection

Per-table selection of row ids for batch actions.

Responsibilities:
- `SelectionSet`: immutable membership value (toggle, select-all, clear).
- `SelectionController`: holds the current value for one table.
- `AdminSelections`: disjoint controllers for every admin table.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from bidboard.domain import ADMIN_TABLES


@dataclass(frozen=True, slots=True)
class SelectionSet:
    table: str
    ids: frozenset[str] = field(default_factory=frozenset)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def toggle(self, row_id: str) -> SelectionSet:
        if row_id in self.ids:
            return SelectionSet(self.table, self.ids - {row_id})
        return SelectionSet(self.table, self.ids | {row_id})

    def select_all(self, current_ids: Iterable[str]) -> SelectionSet:
        """
        Toggle-all: a full selection collapses to empty, anything else expands to
        exactly `current_ids`. "Full" compares sizes only.
        """

        target = frozenset(current_ids)
        if len(self.ids) == len(target):
            return SelectionSet(self.table)
        return SelectionSet(self.table, target)

    def without(self, ids: Iterable[str]) -> SelectionSet:
        return SelectionSet(self.table, self.ids - frozenset(ids))

    def cleared(self) -> SelectionSet:
        return SelectionSet(self.table)


class SelectionController:
    def __init__(self, table: str) -> None:
        self._table = table
        self._current = SelectionSet(table)

    @property
    def table(self) -> str:
        return self._table

    def snapshot(self) -> SelectionSet:
        return self._current

    def toggle(self, row_id: str) -> SelectionSet:
        self._current = self._current.toggle(row_id)
        return self._current

    def select_all(self, current_ids: Iterable[str]) -> SelectionSet:
        self._current = self._current.select_all(current_ids)
        return self._current

    def clear(self) -> SelectionSet:
        self._current = self._current.cleared()
        return self._current

    def discard(self, ids: Iterable[str]) -> SelectionSet:
        self._current = self._current.without(ids)
        return self._current


class AdminSelections:
    def __init__(self, tables: Iterable[str] = ADMIN_TABLES) -> None:
        self._controllers = {t: SelectionController(t) for t in tables}

    def __getitem__(self, table: str) -> SelectionController:
        try:
            return self._controllers[table]
        except KeyError:
            raise KeyError(f"unknown table: {table}") from None

    def snapshot(self) -> dict[str, SelectionSet]:
        return {t: c.snapshot() for t, c in self._controllers.items()}
