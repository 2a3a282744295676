"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authcore.domain.users.entities import PasswordHash, PasswordVerification
from authcore.domain.users.repositories import PasswordHasher
from authcore.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    """Hashes with werkzeug and flags hashes made with other parameters as obsolete.

    ``method`` is a werkzeug method spec ("scrypt", "pbkdf2:sha256:600000", ...).
    werkzeug expands it into the full parameter string stored in front of the
    salt, which is what gets compared to decide whether a hash is current.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length
        self._current_method = self.hash("").method

    @property
    def current_method(self) -> str:
        return self._current_method

    def hash(self, password: str) -> PasswordHash:
        return PasswordHash(
            str(generate_password_hash(password, method=self._method, salt_length=self._salt_length))
        )

    def needs_rehash(self, hashed: PasswordHash) -> bool:
        return hashed.method != self._current_method

    def verify(self, hashed: PasswordHash, password: str) -> PasswordVerification:
        if not hashed.encoded or password is None:
            return PasswordVerification.invalid()
        try:
            matches = check_password_hash(hashed.encoded, password)
        except (ValueError, OverflowError):
            # unknown method, mangled or oversized parameters in the stored value
            logger.debug(f"password_hashing: unreadable hash method={hashed.method!r}")
            return PasswordVerification.invalid()

        if not matches:
            return PasswordVerification.invalid()
        if self.needs_rehash(hashed):
            logger.info(
                f"password_hashing: obsolete hash {hashed.method!r} -> {self._current_method!r}"
            )
            return PasswordVerification.obsolete(self.hash(password))
        return PasswordVerification.valid()
