# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .services.reset_tokens import ResetTokenCodec, check_token, make_token
from .services.session_binding import session_auth_hash, session_hash_matches

__all__ = [
    "ResetTokenCodec",
    "WerkzeugPasswordHasher",
    "check_token",
    "make_token",
    "session_auth_hash",
    "session_hash_matches",
]
