"""
bidboard.provisioning.state

Typed state schema used by the provisioning graph.

Responsibilities:
- Define the contract between transition nodes (inputs/outputs).
"""

from __future__ import annotations

from typing import Annotated, TypedDict

from bidboard.domain import Identity, Profile
from bidboard.provisioning.errors import ProvisionError, ProvisionPhase
from bidboard.provisioning.reducers import append_transitions
from bidboard.validation.forms import SignUpForm


class ProvisioningState(TypedDict, total=False):
    payload: SignUpForm
    phase: ProvisionPhase

    identity: Identity | None
    profile: Profile | None
    error: ProvisionError | None

    # Phases entered, in order; the last one is the current phase.
    transitions: Annotated[list[str], append_transitions]
