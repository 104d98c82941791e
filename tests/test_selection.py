from __future__ import annotations

import pytest

from bidboard.admin.selection import AdminSelections, SelectionController, SelectionSet
from bidboard.domain import AUCTIONS, PROFILES


def test_toggle_twice_restores_membership() -> None:
    start = SelectionSet(PROFILES, frozenset({"a"}))

    assert start.toggle("b").toggle("b") == start
    assert start.toggle("a").toggle("a") == start


def test_toggle_flips_each_call() -> None:
    ctl = SelectionController(PROFILES)

    assert "a" in ctl.toggle("a")
    assert "a" not in ctl.toggle("a")


def test_select_all_from_partial_selects_exactly_current_ids() -> None:
    sel = SelectionSet(PROFILES, frozenset({"a"}))

    assert sel.select_all(["a", "b", "c"]).ids == frozenset({"a", "b", "c"})


def test_select_all_from_full_selection_clears() -> None:
    sel = SelectionSet(PROFILES, frozenset({"a", "b", "c"}))

    assert sel.select_all(["c", "b", "a"]).ids == frozenset()


def test_select_all_from_empty_selects_everything() -> None:
    assert SelectionSet(PROFILES).select_all(["a", "b"]).ids == frozenset({"a", "b"})


def test_select_all_replaces_stale_ids() -> None:
    # Not a union: ids no longer in the collection are dropped.
    sel = SelectionSet(PROFILES, frozenset({"gone"}))

    assert sel.select_all(["a", "b"]).ids == frozenset({"a", "b"})


def test_clear_is_unconditional() -> None:
    ctl = SelectionController(PROFILES)
    ctl.toggle("a")
    ctl.toggle("b")

    assert len(ctl.clear()) == 0
    assert len(ctl.clear()) == 0


def test_snapshot_is_not_affected_by_later_mutation() -> None:
    ctl = SelectionController(PROFILES)
    ctl.toggle("a")
    snap = ctl.snapshot()

    ctl.toggle("b")

    assert snap.ids == frozenset({"a"})


def test_tables_keep_disjoint_selections() -> None:
    selections = AdminSelections()
    selections[PROFILES].toggle("a")

    assert "a" in selections[PROFILES].snapshot()
    assert len(selections[AUCTIONS].snapshot()) == 0


def test_unknown_table_is_rejected() -> None:
    with pytest.raises(KeyError):
        AdminSelections()["identities"]
