"""
bidboard.auth.admin

Administrative gate for the raw-row viewer.

Responsibilities:
- Define the `AdminAuthenticator` capability the viewer depends on.
- Provide a JWT-backed implementation that requires the configured admin role.
"""

from __future__ import annotations

from typing import Protocol

from bidboard.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, principal_claims
from bidboard.auth.models import Principal
from bidboard.observability.logging import get_logger

log = get_logger(__name__)


class AdminAccessDenied(Exception):
    pass


class AdminAuthenticator(Protocol):
    async def authenticate(self, credential: str) -> Principal:
        """
        Return the admin principal for `credential` or raise AdminAccessDenied.
        """
        ...


class JwtAdminAuthenticator:
    """
    Accepts a bearer token only when it validates and carries `admin_role`.
    """

    def __init__(self, *, cfg: JwtConfig, admin_role: str = "admin") -> None:
        self._cfg = cfg
        self._admin_role = admin_role

    async def authenticate(self, credential: str) -> Principal:
        if not credential:
            raise AdminAccessDenied("Missing admin credential")
        try:
            payload = decode_and_validate(cfg=self._cfg, token=credential)
            subject, roles = principal_claims(payload)
        except JwtValidationError as e:
            log.info("admin_gate_rejected", reason=str(e))
            raise AdminAccessDenied("Invalid admin credential") from e

        principal = Principal(subject=subject, roles=roles)
        if not principal.has_role(self._admin_role):
            log.info("admin_gate_rejected", subject=subject, reason="missing_role")
            raise AdminAccessDenied("Insufficient role")
        return principal


# --- Module Notes -----------------------------------------------------------
# Other implementations (SSO session lookups, mTLS client identities) only need to
# satisfy the `AdminAuthenticator` protocol.
