"""
tests.test_observability

Log context: static fields and the acting subject.
"""

from __future__ import annotations

import structlog

from bidboard.auth.models import USER_ROLE, Principal
from bidboard.observability.logging import _add_static_fields
from bidboard.observability.middleware import bind_subject


def test_static_fields_do_not_override_event_values() -> None:
    processor = _add_static_fields(service="bidboard", env="test")

    event = processor(None, "info", {"event": "x", "env": "override"})

    assert event == {"event": "x", "service": "bidboard", "env": "override"}


def test_bind_subject_reaches_log_context() -> None:
    structlog.contextvars.clear_contextvars()
    try:
        bind_subject("ops@example.com")

        assert structlog.contextvars.get_contextvars()["subject"] == "ops@example.com"
    finally:
        structlog.contextvars.clear_contextvars()


def test_end_user_principal_carries_user_role() -> None:
    principal = Principal.end_user("identity-1")

    assert principal.subject == "identity-1"
    assert principal.has_role(USER_ROLE)
    assert not principal.has_role("admin")
