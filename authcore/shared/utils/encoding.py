# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Compact URL-safe encodings used by password reset links.

``base36_*`` turns the token timestamp into a short string; ``*_uid`` turns a
user id into the opaque path component that accompanies the token.
"""

from __future__ import annotations

import base64
import binascii
import re

from authcore.domain.exceptions import InvariantViolation

BASE36_RADIX = 36
BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
U64_MAX = 2**64 - 1
# largest id a signed 64-bit INTEGER column can hold
ID_MAX = 2**63 - 1

# len(base36_encode(U64_MAX)) == 13; longer input can never narrow to u64
_BASE36_MAX_LEN = 13
_BASE36_RE = re.compile(r"[0-9a-z]{1,%d}" % _BASE36_MAX_LEN)
_UID_RE = re.compile(r"[A-Za-z0-9_-]{1,32}")


def base36_encode(value: int) -> str:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvariantViolation("expected an int", field="value")
    if value < 0 or value > U64_MAX:
        raise InvariantViolation("out of unsigned 64-bit range", field="value")
    if value == 0:
        return "0"

    digits: list[str] = []
    while value:
        value, rem = divmod(value, BASE36_RADIX)
        digits.append(BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def base36_decode(text: str) -> int | None:
    """Parse lowercase base-36 text; ``None`` for anything that is not a u64 numeral."""
    if not isinstance(text, str) or not _BASE36_RE.fullmatch(text):
        return None
    value = int(text, BASE36_RADIX)
    if value > U64_MAX:
        return None
    return value


def encode_uid(user_id: int) -> str:
    raw = str(user_id).encode("ascii")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def decode_uid(uidb64: str) -> int | None:
    if not isinstance(uidb64, str) or not _UID_RE.fullmatch(uidb64):
        return None
    padded = uidb64 + "=" * (-len(uidb64) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded).decode("ascii")
    except (binascii.Error, UnicodeDecodeError):
        return None
    if not raw.isdigit():
        return None
    user_id = int(raw)
    if user_id > ID_MAX:
        return None
    return user_id


__all__ = [
    "BASE36_RADIX",
    "ID_MAX",
    "U64_MAX",
    "base36_decode",
    "base36_encode",
    "decode_uid",
    "encode_uid",
]
