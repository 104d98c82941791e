from __future__ import annotations

import dataclasses
from typing import Any

from langgraph.graph import END

from bidboard.domain import PROFILES, Profile
from bidboard.observability.logging import get_logger
from bidboard.provisioning.errors import (
    DUPLICATE_IDENTITY_MESSAGE,
    DUPLICATE_ROLL_NUMBER_MESSAGE,
    PROFILE_CREATION_FAILED_MESSAGE,
    ProvisionError,
    ProvisionErrorKind,
    ProvisionPhase,
)
from bidboard.provisioning.state import ProvisioningState
from bidboard.store.base import DuplicateIdentityError, RemoteStore, StoreError

log = get_logger(__name__)


def _enter(phase: ProvisionPhase, **updates: Any) -> ProvisioningState:
    return {"phase": phase, "transitions": [str(phase)], **updates}  # type: ignore[typeddict-item]


async def check_uniqueness_node(
    state: ProvisioningState, *, store: RemoteStore
) -> ProvisioningState:
    """
    Reject early when a profile already holds the roll number.

    Check-then-act: a concurrent sign-up can pass this check too. The unique
    constraint on `profiles.roll_number` is what finally decides.
    """

    payload = state["payload"]
    try:
        existing = await store.find_one(PROFILES, {"roll_number": payload.roll_number})
    except StoreError as e:
        # The lookup is an optimization; a failing lookup does not block sign-up.
        log.warning("roll_number_lookup_failed", error=str(e))
        existing = None

    if existing is not None:
        log.info("provisioning_rejected", reason="duplicate_roll_number")
        return _enter(
            ProvisionPhase.rejected,
            error=ProvisionError(
                kind=ProvisionErrorKind.duplicate_roll_number,
                message=DUPLICATE_ROLL_NUMBER_MESSAGE,
                phase=ProvisionPhase.rejected,
            ),
        )
    return _enter(ProvisionPhase.creating_identity)


async def create_identity_node(
    state: ProvisioningState, *, store: RemoteStore
) -> ProvisioningState:
    payload = state["payload"]
    try:
        identity = await store.create_identity(
            email=str(payload.email),
            password=payload.password,
            metadata=payload.identity_metadata(),
        )
    except DuplicateIdentityError as e:
        log.info("provisioning_rejected", reason="duplicate_identity")
        return _enter(
            ProvisionPhase.rejected,
            error=ProvisionError(
                kind=ProvisionErrorKind.duplicate_identity,
                message=DUPLICATE_IDENTITY_MESSAGE,
                phase=ProvisionPhase.rejected,
                detail=str(e),
            ),
        )
    except StoreError as e:
        # Nothing was created, so there is nothing to compensate.
        log.warning("identity_creation_failed", error=str(e))
        return _enter(
            ProvisionPhase.failed,
            error=ProvisionError(
                kind=ProvisionErrorKind.identity_creation_failed,
                message=str(e),
                phase=ProvisionPhase.failed,
                detail=str(e),
            ),
        )

    log.info("identity_created", identity_id=identity.id)
    return _enter(ProvisionPhase.creating_profile, identity=identity)


async def create_profile_node(
    state: ProvisioningState, *, store: RemoteStore
) -> ProvisioningState:
    payload = state["payload"]
    identity = state["identity"]
    assert identity is not None

    try:
        row = await store.insert(
            PROFILES,
            {
                "id": identity.id,
                "name": payload.name,
                "roll_number": payload.roll_number,
                "college": payload.college,
                "date_of_birth": payload.date_of_birth,
            },
        )
    except StoreError as e:
        log.warning("profile_creation_failed", identity_id=identity.id, error=str(e))
        return _enter(
            ProvisionPhase.rolling_back,
            error=ProvisionError(
                kind=ProvisionErrorKind.profile_creation_failed,
                message=PROFILE_CREATION_FAILED_MESSAGE,
                phase=ProvisionPhase.failed,
                detail=str(e),
            ),
        )

    log.info("provisioning_committed", identity_id=identity.id)
    return _enter(ProvisionPhase.committed, profile=Profile.model_validate(row))


async def rollback_node(state: ProvisioningState, *, store: RemoteStore) -> ProvisioningState:
    """
    Best-effort removal of the identity created before the profile insert failed.

    A failing rollback is logged and recorded on the error; the reported cause
    stays PROFILE_CREATION_FAILED.
    """

    identity = state["identity"]
    error = state["error"]
    assert identity is not None and error is not None

    try:
        await store.delete_identity(identity.id)
    except StoreError as e:
        log.warning(
            "compensation_failed",
            identity_id=identity.id,
            error=str(e),
            primary_error=error.detail,
        )
        error = dataclasses.replace(error, compensation_error=str(e))
    else:
        log.info("compensation_succeeded", identity_id=identity.id)

    return _enter(ProvisionPhase.failed, identity=None, error=error)


def route_after_check(state: ProvisioningState) -> str:
    if state.get("phase") == ProvisionPhase.creating_identity:
        return "create_identity"
    return END


def route_after_identity(state: ProvisioningState) -> str:
    if state.get("phase") == ProvisionPhase.creating_profile:
        return "create_profile"
    return END


def route_after_profile(state: ProvisioningState) -> str:
    if state.get("phase") == ProvisionPhase.rolling_back:
        return "rollback"
    return END
