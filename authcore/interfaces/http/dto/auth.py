from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from authcore.domain.users.entities import MAX_NAME_LENGTH, User
from authcore.shared.config import load_config

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_password_length(value: str) -> str:
    min_length = load_config().passwords.min_length
    if len(value) < min_length:
        raise PydanticCustomError(
            "password_too_short",
            "Password must be at least {min_length} characters long",
            {"min_length": min_length},
        )
    return value


class RegisterRequestDTO(BaseModel):
    name: str = Field(default="", max_length=MAX_NAME_LENGTH)
    email: str = Field(max_length=320)
    username: str
    password: str = Field(max_length=1024)
    password_confirm: str = Field(max_length=1024)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise PydanticCustomError("email_invalid", "Enter a valid email address", {})
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_length(value)


class LoginRequestDTO(BaseModel):
    # length and shape are checked by the authenticator
    username: str
    password: str = Field(max_length=1024)


class ForgotPasswordRequestDTO(BaseModel):
    username: str = Field(max_length=1024)


class ResetPasswordRequestDTO(BaseModel):
    password: str = Field(max_length=1024)
    password_confirm: str = Field(max_length=1024)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_length(value)


class UserDTO(BaseModel):
    id: int
    username: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserDTO:
        return cls(id=user.require_id(), username=user.username, name=user.name, email=user.email)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    user: UserDTO | None = None
