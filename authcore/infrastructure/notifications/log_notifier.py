# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.repositories import ResetNotifier
from authcore.shared.logging import logger


class LoggingResetNotifier(ResetNotifier):
    """Writes the reset link to the log instead of sending it.

    Stand-in until mail delivery exists; anything implementing
    ``deliver_reset_link`` can replace it in the container.
    """

    def __init__(self, url_base: str) -> None:
        self._url_base = url_base.rstrip("/")

    def build_link(self, uidb64: str, token: str) -> str:
        return f"{self._url_base}/{uidb64}/{token}"

    def deliver_reset_link(self, destination: str, token: str, uidb64: str) -> None:
        logger.info(
            f"notify.reset_link: to={destination} link={self.build_link(uidb64, token)}"
        )
