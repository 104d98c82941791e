"""
bidboard.validation.forms

Pydantic schemas for user-submitted forms.

Each form declares `error_messages`: the message reported when a field fails any
of its checks. Payload keys may be snake_case or camelCase.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, ClassVar

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"not an http(s) URL: {value!r}") from e
    return value


# Validated as an http(s) URL, kept exactly as submitted.
HttpUrlString = Annotated[str, AfterValidator(_check_http_url)]


class BaseForm(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    error_messages: ClassVar[dict[str, str]] = {}


class SignUpForm(BaseForm):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    roll_number: str = Field(min_length=1)
    college: str = Field(min_length=1)
    date_of_birth: date

    error_messages: ClassVar[dict[str, str]] = {
        "name": "Name is required",
        "email": "Invalid email address",
        "password": "Password must be at least 6 characters",
        "roll_number": "Roll number is required",
        "college": "College name is required",
        "date_of_birth": "Date of birth is required",
    }

    def identity_metadata(self) -> dict[str, str]:
        # Side-channel metadata stored alongside the identity at the provider.
        return {
            "name": self.name,
            "roll_number": self.roll_number,
            "college": self.college,
            "date_of_birth": self.date_of_birth.isoformat(),
        }


class SignInForm(BaseForm):
    email: EmailStr
    password: str = Field(min_length=1)

    error_messages: ClassVar[dict[str, str]] = {
        "email": "Invalid email address",
        "password": "Password is required",
    }


class ListingForm(BaseForm):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image_url: HttpUrlString
    link: HttpUrlString

    error_messages: ClassVar[dict[str, str]] = {
        "title": "Title is required",
        "description": "Description is required",
        "image_url": "Invalid image URL",
        "link": "Invalid link",
    }
