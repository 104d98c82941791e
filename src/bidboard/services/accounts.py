"""
bidboard.services.accounts

Sign-up and sign-in flows.

Responsibilities:
- Validate raw sign-up payloads, then hand them to `AccountProvisioner`.
- Validate sign-in payloads, authenticate against the store, issue a session token.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from bidboard.auth.jwt import JwtConfig, issue_token
from bidboard.auth.models import USER_ROLE
from bidboard.domain import Identity, Profile
from bidboard.observability.logging import get_logger
from bidboard.provisioning.errors import ProvisionError
from bidboard.provisioning.provisioner import AccountProvisioner
from bidboard.result import Err, Ok, Result
from bidboard.settings import Settings
from bidboard.store.base import InvalidCredentialsError, RemoteStore, StoreError
from bidboard.validation.forms import SignInForm, SignUpForm
from bidboard.validation.validator import FormError, validate

log = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password. Please try again."


class SignInErrorKind(enum.StrEnum):
    invalid_credentials = "INVALID_CREDENTIALS"
    store_failed = "STORE_FAILED"


@dataclass(frozen=True, slots=True)
class SignInError:
    kind: SignInErrorKind
    message: str


@dataclass(frozen=True, slots=True)
class Session:
    identity: Identity
    access_token: str
    expires_in: int
    token_type: str = "bearer"


class AccountService:
    def __init__(self, *, store: RemoteStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings
        self._provisioner = AccountProvisioner(store=store)

    async def sign_up(
        self, raw: Mapping[str, Any]
    ) -> Result[Profile, FormError | ProvisionError]:
        validated = validate(SignUpForm, raw)
        if isinstance(validated, Err):
            return validated
        return await self._provisioner.provision(validated.value)

    async def sign_in(
        self, raw: Mapping[str, Any]
    ) -> Result[Session, FormError | SignInError]:
        validated = validate(SignInForm, raw)
        if isinstance(validated, Err):
            return validated
        form = validated.value

        try:
            identity = await self._store.authenticate(email=str(form.email), password=form.password)
        except InvalidCredentialsError:
            log.info("sign_in_rejected")
            return Err(
                SignInError(
                    kind=SignInErrorKind.invalid_credentials,
                    message=INVALID_CREDENTIALS_MESSAGE,
                )
            )
        except StoreError as e:
            log.warning("sign_in_failed", error=str(e))
            return Err(SignInError(kind=SignInErrorKind.store_failed, message=str(e)))

        ttl = timedelta(minutes=self._settings.session_ttl_minutes)
        token = issue_token(
            cfg=JwtConfig.from_settings(self._settings),
            subject=identity.id,
            roles=[USER_ROLE],
            ttl=ttl,
            extra={"email": identity.email},
        )
        return Ok(
            Session(identity=identity, access_token=token, expires_in=int(ttl.total_seconds()))
        )
