"""Account DTOs (Pydantic v2).

Usernames are case-insensitive: they are stored and compared lowercased.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.accounts.constants import (
    PASSWORD_MIN_LENGTH,
    PERSON_NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)

# Passwords are taken verbatim, so no whitespace stripping here.
_DTO_CONFIG = ConfigDict(frozen=True, extra="ignore")


class RegisterUserDTO(BaseModel):
    model_config = _DTO_CONFIG

    username: str = Field(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    first_name: str = Field(default="", max_length=PERSON_NAME_MAX_LENGTH)
    last_name: str = Field(default="", max_length=PERSON_NAME_MAX_LENGTH)

    @field_validator("username", "first_name", "last_name", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str) -> str:
        return v.lower()


class ChangePasswordDTO(BaseModel):
    """The caller confirms the current password before setting a new one."""

    model_config = _DTO_CONFIG

    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class ConfirmPasswordDTO(BaseModel):
    """Administrators re-enter their own password for destructive actions."""

    model_config = _DTO_CONFIG

    password: str = Field(min_length=1)
