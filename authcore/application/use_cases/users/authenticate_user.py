# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.entities import (
    MAX_USERNAME_LENGTH,
    Credentials,
    PasswordHash,
    User,
    VerificationStatus,
)
from authcore.domain.users.exceptions import (
    InvalidCredentialsFormatError,
    PasswordUpgradeError,
)
from authcore.domain.users.repositories import PasswordHasher, UserRepository
from authcore.shared.errors.base import AppError, BackendError
from authcore.shared.logging import logger


class AuthenticateUserUseCase:
    """Checks credentials against the store.

    Returns the user or ``None``; an unknown username and a wrong password look
    the same to the caller. Store failures raise ``BackendError``. When the
    stored hash is obsolete it is replaced and saved; if that save fails the
    caller gets ``PasswordUpgradeError`` ("verified but failed to upgrade"),
    which carries the verified user.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, credentials: Credentials) -> User | None:
        username = credentials.username
        if not username or len(username) > MAX_USERNAME_LENGTH:
            raise InvalidCredentialsFormatError()

        user = self._lookup(username)
        if user is None:
            logger.info("auth.authenticate: no match")
            return None

        result = self._password_hasher.verify(user.password_hash, credentials.password)
        if result.status is VerificationStatus.INVALID:
            logger.info(f"auth.authenticate: no match user_id={user.id}")
            return None

        if result.status is VerificationStatus.VALID_OBSOLETE and result.new_hash is not None:
            user = self._upgrade(user, result.new_hash)

        logger.info(f"auth.authenticate: ok user_id={user.id}")
        return user

    def get_by_id(self, user_id: int) -> User | None:
        try:
            return self._users.find_by_id(user_id)
        except AppError:
            raise
        except Exception as exc:
            raise BackendError("find_by_id") from exc

    def _lookup(self, username: str) -> User | None:
        try:
            return self._users.find_by_username(username)
        except AppError:
            raise
        except Exception as exc:
            raise BackendError("find_by_username") from exc

    def _upgrade(self, user: User, new_hash: PasswordHash) -> User:
        upgraded = user.with_password_hash(new_hash)
        try:
            saved = self._users.save(upgraded)
        except Exception as exc:
            logger.warning(
                f"auth.authenticate: verified but failed to upgrade hash user_id={user.id}"
            )
            raise PasswordUpgradeError(user) from exc
        logger.info(f"auth.authenticate: upgraded password hash user_id={user.id}")
        return saved
