"""
bidboard.provisioning.reducers

Reducers define how LangGraph merges node updates into provisioning state.
"""

from __future__ import annotations


def append_transitions(left: list[str] | None, right: list[str] | None) -> list[str]:
    """
    Append-only reducer for the transition trail.

    Nodes return `{"transitions": [phase]}` and this reducer concatenates.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]
