"""
bidboard.provisioning.errors

Provisioning phases and the error value returned to callers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ProvisionPhase(enum.StrEnum):
    checking_uniqueness = "CHECKING_UNIQUENESS"
    creating_identity = "CREATING_IDENTITY"
    creating_profile = "CREATING_PROFILE"
    rolling_back = "ROLLING_BACK"
    committed = "COMMITTED"
    rejected = "REJECTED"
    failed = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (ProvisionPhase.committed, ProvisionPhase.rejected, ProvisionPhase.failed)


class ProvisionErrorKind(enum.StrEnum):
    duplicate_roll_number = "DUPLICATE_ROLL_NUMBER"
    duplicate_identity = "DUPLICATE_IDENTITY"
    identity_creation_failed = "IDENTITY_CREATION_FAILED"
    profile_creation_failed = "PROFILE_CREATION_FAILED"


DUPLICATE_ROLL_NUMBER_MESSAGE = "A user with this roll number already exists"
DUPLICATE_IDENTITY_MESSAGE = "This email is already registered. Please sign in instead."
PROFILE_CREATION_FAILED_MESSAGE = "Failed to create profile. Please try again."


@dataclass(frozen=True, slots=True)
class ProvisionError:
    """
    `message` is what the user sees; `detail` keeps the raw backend message.
    `compensation_error` is set only when the identity rollback itself failed.
    """

    kind: ProvisionErrorKind
    message: str
    phase: ProvisionPhase
    detail: str | None = None
    compensation_error: str | None = None

    @property
    def is_rejection(self) -> bool:
        return self.phase == ProvisionPhase.rejected
