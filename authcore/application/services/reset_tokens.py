# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless password reset tokens.

A token is ``<base36 timestamp>-<signature>`` where the signature is the first
20 hex characters of HMAC-SHA256(secret, id + hash + timestamp). The signed
material is the decimal user id, the canonical stored password hash
(``PasswordHash.encoded``) and the decimal timestamp, concatenated without
separators. Changing any of these, the truncation length or the digest
invalidates every outstanding token.

Folding the password hash in makes a token single-use: once the password is
reset the hash changes and old tokens no longer verify. No token table needed.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass, field

from authcore.domain.users.entities import User
from authcore.shared.logging import logger
from authcore.shared.utils.encoding import base36_decode, base36_encode

SIGNATURE_HEX_LENGTH = 20
TOKEN_SEPARATOR = "-"


def _key(secret: bytes | str) -> bytes:
    return secret.encode("utf-8") if isinstance(secret, str) else secret


def _now() -> int:
    return int(time.time())


def _signature(user: User, timestamp: int, secret: bytes | str) -> str:
    material = f"{user.require_id()}{user.password_hash.encoded}{timestamp}"
    mac = hmac.new(_key(secret), material.encode("utf-8"), hashlib.sha256)
    return mac.hexdigest()[:SIGNATURE_HEX_LENGTH]


def _token_for(user: User, timestamp: int, secret: bytes | str) -> str:
    return f"{base36_encode(timestamp)}{TOKEN_SEPARATOR}{_signature(user, timestamp, secret)}"


def make_token(user: User, secret: bytes | str, *, now: int | None = None) -> str:
    """Mint a reset token for a saved user."""
    timestamp = _now() if now is None else now
    return _token_for(user, timestamp, secret)


def check_token(
    user: User,
    token: str,
    secret: bytes | str,
    timeout_seconds: int,
    *,
    now: int | None = None,
) -> bool:
    """True only for an unexpired token minted for this user's current hash.

    Every failure collapses to ``False``; the reason is logged at debug level.
    """
    if user.id is None or not isinstance(token, str):
        return False

    ts_part, sep, _ = token.partition(TOKEN_SEPARATOR)
    if not sep:
        logger.debug(f"reset_tokens: malformed token for user_id={user.id}")
        return False

    timestamp = base36_decode(ts_part)
    if timestamp is None:
        logger.debug(f"reset_tokens: undecodable timestamp for user_id={user.id}")
        return False

    current = _now() if now is None else now
    age = current - timestamp
    if age < 0:
        logger.debug(f"reset_tokens: future-dated token for user_id={user.id}")
        return False
    if age > timeout_seconds:
        logger.debug(f"reset_tokens: expired token for user_id={user.id} age={age}s")
        return False

    expected = _token_for(user, timestamp, secret)
    if not hmac.compare_digest(expected.encode("ascii"), token.encode("utf-8", "surrogatepass")):
        logger.debug(f"reset_tokens: signature mismatch for user_id={user.id}")
        return False
    return True


@dataclass(slots=True, frozen=True)
class ResetTokenCodec:
    """Binds the process-wide secret and timeout for callers that pass a codec around."""

    secret: bytes = field(repr=False)
    timeout_seconds: int

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    def make_token(self, user: User, *, now: int | None = None) -> str:
        return make_token(user, self.secret, now=now)

    def check_token(self, user: User, token: str, *, now: int | None = None) -> bool:
        return check_token(user, token, self.secret, self.timeout_seconds, now=now)


__all__ = [
    "SIGNATURE_HEX_LENGTH",
    "ResetTokenCodec",
    "check_token",
    "make_token",
]
