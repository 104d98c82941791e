"""
bidboard.provisioning.provisioner

Account provisioning entry point.

Responsibilities:
- Run the provisioning graph once per sign-up (no retries, no memory across calls).
- Map the terminal phase to `Ok(Profile)` or `Err(ProvisionError)`.
"""

from __future__ import annotations

from bidboard.domain import Profile
from bidboard.observability.logging import get_logger
from bidboard.provisioning.errors import ProvisionError, ProvisionPhase
from bidboard.provisioning.graph import build_graph
from bidboard.provisioning.state import ProvisioningState
from bidboard.result import Err, Ok, Result
from bidboard.store.base import RemoteStore
from bidboard.validation.forms import SignUpForm

log = get_logger(__name__)


class AccountProvisioner:
    def __init__(self, *, store: RemoteStore) -> None:
        self._store = store
        self._graph = build_graph(store=store)

    async def provision(self, payload: SignUpForm) -> Result[Profile, ProvisionError]:
        initial: ProvisioningState = {
            "payload": payload,
            "phase": ProvisionPhase.checking_uniqueness,
            "identity": None,
            "profile": None,
            "error": None,
            "transitions": [str(ProvisionPhase.checking_uniqueness)],
        }
        final: ProvisioningState = await self._graph.ainvoke(initial)

        phase = final.get("phase")
        log.info("provisioning_finished", phase=str(phase), transitions=final.get("transitions"))

        if phase == ProvisionPhase.committed:
            profile = final.get("profile")
            assert profile is not None
            return Ok(profile)

        error = final.get("error")
        if error is None or phase not in (ProvisionPhase.rejected, ProvisionPhase.failed):
            raise RuntimeError(f"provisioning stopped in non-terminal phase {phase}")
        return Err(error)


# --- Module Notes -----------------------------------------------------------
# Each node is importable from `provisioning.nodes` so a single transition (and its
# compensation) can be exercised against a fake store without running the graph.
