"""
bidboard.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue short-lived session tokens after sign-in (and dev tokens in non-prod).
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat/sub).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from bidboard.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    roles: list[str],
    ttl: timedelta = timedelta(hours=1),
    extra: dict[str, Any] | None = None,
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        **(extra or {}),
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "roles": roles,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def principal_claims(payload: dict[str, Any]) -> tuple[str, frozenset[str]]:
    """
    Extract (subject, roles) from a validated payload; raises JwtValidationError on bad shapes.
    """

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise JwtValidationError("Invalid token subject")
    if not isinstance(roles_raw, list):
        raise JwtValidationError("Invalid token roles")
    return subject, frozenset(str(r) for r in roles_raw)


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by:
# - `services/accounts.py` (session token after sign-in)
# - `api/routers/dev_auth.py` (dev convenience)
