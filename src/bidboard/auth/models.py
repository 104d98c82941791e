"""
bidboard.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
- Name the role carried by every signed-in bidder. The admin role is configurable
  (`Settings.admin_role`) and checked by `auth.admin`.
"""

from __future__ import annotations

from dataclasses import dataclass

USER_ROLE = "user"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. `subject` is the Identity id for end users.
    """

    subject: str
    roles: frozenset[str]

    @classmethod
    def end_user(cls, identity_id: str) -> Principal:
        return cls(subject=identity_id, roles=frozenset({USER_ROLE}))

    def has_role(self, role: str) -> bool:
        return role in self.roles
