from __future__ import annotations

import pytest

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.domain.users.entities import PasswordHash, VerificationStatus


def test_hash_embeds_current_method_and_fresh_salt(hasher: WerkzeugPasswordHasher) -> None:
    first = hasher.hash("correct-horse")
    second = hasher.hash("correct-horse")

    assert first.method == "pbkdf2:sha256:1000"
    assert first.encoded != second.encoded
    assert "correct-horse" not in first.encoded
    assert "correct-horse" not in repr(first)


def test_verify_current_hash(hasher: WerkzeugPasswordHasher) -> None:
    result = hasher.verify(hasher.hash("correct-horse"), "correct-horse")

    assert result.status is VerificationStatus.VALID
    assert result.new_hash is None


def test_verify_wrong_password(hasher: WerkzeugPasswordHasher) -> None:
    result = hasher.verify(hasher.hash("correct-horse"), "battery-staple")

    assert result.status is VerificationStatus.INVALID
    assert not result.is_valid


def test_verify_legacy_hash_returns_replacement(
    hasher: WerkzeugPasswordHasher, legacy_hasher: WerkzeugPasswordHasher
) -> None:
    legacy = legacy_hasher.hash("correct-horse")
    assert legacy.method == legacy_hasher.current_method != hasher.current_method

    result = hasher.verify(legacy, "correct-horse")

    assert result.status is VerificationStatus.VALID_OBSOLETE
    assert result.new_hash is not None
    assert result.new_hash.method == hasher.current_method
    assert hasher.verify(result.new_hash, "correct-horse").status is VerificationStatus.VALID


def test_verify_legacy_hash_with_wrong_password_is_invalid(
    hasher: WerkzeugPasswordHasher, legacy_hasher: WerkzeugPasswordHasher
) -> None:
    result = hasher.verify(legacy_hasher.hash("correct-horse"), "nope")

    assert result.status is VerificationStatus.INVALID
    assert result.new_hash is None


@pytest.mark.parametrize(
    "encoded",
    [
        "",
        "garbage",
        "nope$salt$abcdef",
        "pbkdf2:sha256:xyz$salt$abcdef",
        "pbkdf2:nosuchdigest:1000$salt$abcdef",
        "scrypt:1:2$salt$abcdef",
        "pbkdf2:sha256:99999999999999999999999$salt$abcd",
        "scrypt:99999999999999999999999:8:1$salt$abcd",
    ],
)
def test_malformed_hash_is_invalid_not_an_error(
    hasher: WerkzeugPasswordHasher, encoded: str
) -> None:
    assert hasher.verify(PasswordHash(encoded), "anything").status is VerificationStatus.INVALID


def test_default_method_is_scrypt() -> None:
    assert WerkzeugPasswordHasher().current_method.startswith("scrypt:")
