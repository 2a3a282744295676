# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for the forgot-password step."""

from __future__ import annotations

from authcore.application.services.reset_tokens import ResetTokenCodec
from authcore.domain.users.repositories import ResetNotifier, UserRepository
from authcore.shared.logging import logger
from authcore.shared.utils.encoding import encode_uid


class RequestPasswordResetUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        codec: ResetTokenCodec,
        notifier: ResetNotifier,
    ) -> None:
        self._users = users
        self._codec = codec
        self._notifier = notifier

    def execute(self, username: str) -> None:
        """Send a reset link if the user exists. Returns nothing either way."""
        user = self._users.find_by_username(username) if username else None
        if user is None or user.id is None:
            logger.info("auth.forgot_password: no deliverable user")
            return

        token = self._codec.make_token(user)
        self._notifier.deliver_reset_link(user.email, token, encode_uid(user.id))
        logger.info(f"auth.forgot_password: link issued user_id={user.id}")
