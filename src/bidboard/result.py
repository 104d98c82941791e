"""
bidboard.result

Explicit success/failure values returned by orchestration entry points.

Responsibilities:
- Model `Ok(value)` / `Err(error)` so callers reconcile local state only on success.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


# --- Module Notes -----------------------------------------------------------
# Store adapters raise exceptions; services and orchestrators convert them into
# `Err` values at their boundary.
