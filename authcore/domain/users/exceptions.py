# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authcore.shared.errors.base import BackendError, DomainError, ValidationError

from .entities import User


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class InvalidResetTokenError(DomainError):
    code = "invalid_reset_token"


class InvalidCredentialsFormatError(ValidationError):
    def __init__(self) -> None:
        super().__init__(code="invalid_credentials_format")


class PasswordMismatchError(ValidationError):
    def __init__(self) -> None:
        super().__init__(code="password_mismatch")


class PasswordUpgradeError(BackendError):
    """The password was verified but persisting the upgraded hash failed.

    ``user`` is the authenticated user with the old hash still in place, so a
    caller may choose to complete the login anyway.
    """

    def __init__(self, user: User) -> None:
        super().__init__("save", code="password_upgrade_failed")
        self.user = user
