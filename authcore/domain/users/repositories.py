# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import PasswordHash, PasswordVerification, User


class UserRepository(Protocol):
    """Credential store. Implementations raise ``BackendError`` on failure."""

    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def save(self, user: User) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> PasswordHash: ...
    def verify(self, hashed: PasswordHash, password: str) -> PasswordVerification: ...


class ResetNotifier(Protocol):
    def deliver_reset_link(self, destination: str, token: str, uidb64: str) -> None: ...
