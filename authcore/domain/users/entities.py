# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

from authcore.domain.exceptions import InvariantViolation

MAX_USERNAME_LENGTH = 254
MAX_NAME_LENGTH = 254


@dataclass(slots=True, frozen=True, eq=False)
class PasswordHash:
    """Stored password hash snapshot: ``method$salt$digest``.

    ``encoded`` is the canonical text persisted by the store and the only form
    folded into signatures. Compare hashes through the hasher, never with ``==``.
    """

    encoded: str

    @property
    def method(self) -> str:
        method, sep, _ = self.encoded.partition("$")
        return method if sep else ""

    def __repr__(self) -> str:
        return f"PasswordHash(method={self.method!r})"

    def __str__(self) -> str:
        return self.encoded


class VerificationStatus(StrEnum):
    VALID = "valid"
    VALID_OBSOLETE = "valid_obsolete"
    INVALID = "invalid"


@dataclass(slots=True, frozen=True)
class PasswordVerification:
    status: VerificationStatus
    new_hash: PasswordHash | None = None

    @classmethod
    def valid(cls) -> PasswordVerification:
        return cls(VerificationStatus.VALID)

    @classmethod
    def obsolete(cls, new_hash: PasswordHash) -> PasswordVerification:
        return cls(VerificationStatus.VALID_OBSOLETE, new_hash)

    @classmethod
    def invalid(cls) -> PasswordVerification:
        return cls(VerificationStatus.INVALID)

    @property
    def is_valid(self) -> bool:
        return self.status is not VerificationStatus.INVALID


@dataclass(slots=True, frozen=True)
class User:

    username: str
    name: str
    email: str
    password_hash: PasswordHash
    id: int | None = None

    def __post_init__(self) -> None:
        if len(self.username) > MAX_USERNAME_LENGTH:
            raise InvariantViolation("too long", field="username")
        if len(self.name) > MAX_NAME_LENGTH:
            raise InvariantViolation("too long", field="name")

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def require_id(self) -> int:
        if self.id is None:
            raise InvariantViolation("user has not been saved yet", field="id")
        return self.id

    def with_password_hash(self, password_hash: PasswordHash) -> User:
        return replace(self, password_hash=password_hash)

    def __str__(self) -> str:
        return self.username


@dataclass(slots=True, frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)
