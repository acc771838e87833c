"""Recommender profile validation."""

import re
from typing import Annotated, Any, Mapping, Optional

import logfire
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError

from letters.domain.error import ValidationError

from .base import Service

NAME_PATTERN = r"^[A-Za-z\s'-]+$"
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{7,20}$")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

PersonName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=1, max_length=100, pattern=NAME_PATTERN
    ),
]
ShortText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]
LongText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


class ValidatedProfile(BaseModel):
    """Confirmation fields that passed every policy check.

    Text fields are trimmed; the password is kept exactly as typed.
    """

    model_config = ConfigDict(frozen=True)

    first_name: PersonName
    last_name: PersonName
    title: LongText
    organization: LongText
    relationship_duration: ShortText
    relationship_type: ShortText
    mobile_phone: Optional[str] = None
    password: str = Field(repr=False)

    @field_validator("mobile_phone", mode="before")
    @classmethod
    def blank_phone_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("mobile_phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not PHONE_PATTERN.match(v):
            raise ValueError("Invalid phone number format")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(v) > MAX_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at most {MAX_PASSWORD_LENGTH} characters"
            )
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain a lowercase letter")
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain an uppercase letter")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain a digit")
        return v


class ProfileValidator(Service):
    """Applies the required-field and password policy to confirmation input."""

    def validate(self, fields: Mapping[str, Any]) -> ValidatedProfile:
        """Validate raw confirmation fields.

        Args:
            fields: Submitted profile fields, including ``password``

        Returns:
            The cleaned profile fields

        Raises:
            ValidationError: With one entry per failing field
        """
        try:
            return ValidatedProfile.model_validate(dict(fields))
        except PydanticValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in error["loc"]) or "body",
                    "message": _message(error),
                }
                for error in e.errors()
            ]
            logfire.warn(
                "Profile validation failed",
                fields=[error["field"] for error in errors],
            )
            raise ValidationError("Invalid profile fields", errors=errors)


def _message(error: Mapping[str, Any]) -> str:
    # Custom validators surface as "Value error, <msg>"
    message = str(error["msg"])
    prefix = "Value error, "
    if message.startswith(prefix):
        return message[len(prefix) :]
    return message
