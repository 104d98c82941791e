"""
bidboard.validation.validator

Black-box form validation used ahead of every remote call.

Responsibilities:
- Validate a raw mapping against a form schema.
- Report only the first violation, as a human-readable message.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import ValidationError

from bidboard.result import Err, Ok, Result
from bidboard.validation.forms import BaseForm

F = TypeVar("F", bound=BaseForm)


@dataclass(frozen=True, slots=True)
class FormError:
    message: str
    field: str | None = None


def validate(form: type[F], payload: Mapping[str, Any]) -> Result[F, FormError]:
    try:
        return Ok(form.model_validate(dict(payload)))
    except ValidationError as e:
        return Err(_first_error(form, e))


def _first_error(form: type[BaseForm], exc: ValidationError) -> FormError:
    errors = exc.errors()
    if not errors:
        return FormError(message="Invalid form data")

    first = errors[0]
    loc = first.get("loc") or ()
    field = _field_name(form, str(loc[0])) if loc else None
    if field is not None and field in form.error_messages:
        return FormError(message=form.error_messages[field], field=field)
    return FormError(message=str(first.get("msg", "Invalid form data")), field=field)


def _field_name(form: type[BaseForm], key: str) -> str:
    # Errors are located by alias (camelCase); map back to the declared field name.
    for name, info in form.model_fields.items():
        if key in (name, info.alias):
            return name
    return key
