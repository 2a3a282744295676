# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.entities import MAX_NAME_LENGTH, MAX_USERNAME_LENGTH, User
from authcore.domain.users.exceptions import (
    InvalidCredentialsFormatError,
    PasswordMismatchError,
    UserAlreadyExistsError,
)
from authcore.domain.users.repositories import PasswordHasher, UserRepository
from authcore.shared.errors.base import ValidationError
from authcore.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        *,
        name: str,
        email: str,
        username: str,
        password: str,
        password_confirm: str,
    ) -> User:
        if not username or len(username) > MAX_USERNAME_LENGTH:
            raise InvalidCredentialsFormatError()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError("name_too_long", context={"max_length": MAX_NAME_LENGTH})
        if password != password_confirm:
            raise PasswordMismatchError()

        if self._users.find_by_username(username):
            raise UserAlreadyExistsError()

        user = User(
            username=username,
            name=name,
            email=email,
            password_hash=self._password_hasher.hash(password),
        )
        persisted = self._users.save(user)
        logger.info(f"auth.register: created user_id={persisted.id}")
        return persisted
