# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for committing a new password with a reset token."""

from __future__ import annotations

from authcore.application.services.reset_tokens import ResetTokenCodec
from authcore.domain.users.entities import User
from authcore.domain.users.exceptions import InvalidResetTokenError, PasswordMismatchError
from authcore.domain.users.repositories import PasswordHasher, UserRepository
from authcore.shared.logging import logger
from authcore.shared.utils.encoding import decode_uid


class ConfirmPasswordResetUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        codec: ResetTokenCodec,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._codec = codec
        self._password_hasher = password_hasher

    def validate(self, uidb64: str, token: str) -> User:
        """Resolve the link target or raise ``InvalidResetTokenError``."""
        user_id = decode_uid(uidb64)
        user = self._users.find_by_id(user_id) if user_id is not None else None
        if user is None or not self._codec.check_token(user, token):
            logger.info("auth.reset_password: rejected link")
            raise InvalidResetTokenError()
        return user

    def execute(
        self, uidb64: str, token: str, password: str, password_confirm: str
    ) -> User:
        user = self.validate(uidb64, token)
        if password != password_confirm:
            raise PasswordMismatchError()

        updated = self._users.save(user.with_password_hash(self._password_hasher.hash(password)))
        logger.info(f"auth.reset_password: password changed user_id={updated.id}")
        return updated
