# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session binding hash.

The value is an HMAC-SHA512 over the user's stored password hash, so it changes
whenever the password (or just its hash parameters) change. The session layer
stores it at login and compares it on every request.
"""

from __future__ import annotations

import hashlib
import hmac

from authcore.domain.users.entities import User


def _key(secret: bytes | str) -> bytes:
    return secret.encode("utf-8") if isinstance(secret, str) else secret


def session_auth_hash(user: User, secret: bytes | str) -> str:
    mac = hmac.new(_key(secret), user.password_hash.encoded.encode("utf-8"), hashlib.sha512)
    return mac.hexdigest()


def session_hash_matches(user: User, secret: bytes | str, stored: str | None) -> bool:
    if not isinstance(stored, str) or not stored:
        return False
    expected = session_auth_hash(user, secret)
    return hmac.compare_digest(expected.encode("ascii"), stored.encode("utf-8"))


__all__ = ["session_auth_hash", "session_hash_matches"]
