from __future__ import annotations

import pytest

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.domain.users.entities import Credentials, User
from authcore.domain.users.exceptions import (
    InvalidCredentialsFormatError,
    PasswordMismatchError,
    PasswordUpgradeError,
    UserAlreadyExistsError,
)
from authcore.shared.errors.base import BackendError

from .conftest import (
    BrokenUserRepository,
    InMemoryUserRepository,
    UnreachableUserRepository,
)


def _legacy_user(repo: InMemoryUserRepository, legacy_hasher: WerkzeugPasswordHasher) -> User:
    return repo.save(
        User(
            username="carol",
            name="Carol",
            email="carol@example.com",
            password_hash=legacy_hasher.hash("old-but-right"),
        )
    )


def test_authenticate_success(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, alice: User
) -> None:
    use_case = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    user = use_case.execute(Credentials("alice", "correct-horse"))

    assert user is not None
    assert user.id == alice.id
    assert users.saves == 1


def test_wrong_password_and_unknown_user_look_the_same(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, alice: User
) -> None:
    use_case = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    assert use_case.execute(Credentials("alice", "wrong")) is None
    assert use_case.execute(Credentials("nobody", "correct-horse")) is None


def test_legacy_hash_is_upgraded_on_login(
    users: InMemoryUserRepository,
    hasher: WerkzeugPasswordHasher,
    legacy_hasher: WerkzeugPasswordHasher,
) -> None:
    carol = _legacy_user(users, legacy_hasher)
    use_case = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    user = use_case.execute(Credentials("carol", "old-but-right"))

    assert user is not None
    stored = users.find_by_username("carol")
    assert stored is not None
    assert stored.password_hash.method == hasher.current_method
    assert stored.password_hash.encoded != carol.password_hash.encoded
    assert use_case.execute(Credentials("carol", "old-but-right")) is not None
    assert users.saves == 2


def test_failed_upgrade_is_reported_with_verified_user(
    hasher: WerkzeugPasswordHasher, legacy_hasher: WerkzeugPasswordHasher
) -> None:
    repo = BrokenUserRepository()
    carol = _legacy_user(repo, legacy_hasher)
    use_case = AuthenticateUserUseCase(users=repo, password_hasher=hasher)

    with pytest.raises(PasswordUpgradeError) as info:
        use_case.execute(Credentials("carol", "old-but-right"))

    assert info.value.user.id == carol.id
    assert info.value.code == "password_upgrade_failed"
    assert isinstance(info.value, BackendError)
    assert isinstance(info.value.__cause__, ConnectionError)


def test_store_failure_propagates_as_backend_error(hasher: WerkzeugPasswordHasher) -> None:
    use_case = AuthenticateUserUseCase(users=UnreachableUserRepository(), password_hasher=hasher)

    with pytest.raises(BackendError) as info:
        use_case.execute(Credentials("alice", "correct-horse"))

    assert isinstance(info.value.__cause__, ConnectionError)


def test_foreign_store_exception_is_wrapped(hasher: WerkzeugPasswordHasher) -> None:
    class ExplodingRepository(InMemoryUserRepository):
        def find_by_id(self, user_id: int) -> User | None:
            raise TimeoutError("slow disk")

    use_case = AuthenticateUserUseCase(users=ExplodingRepository(), password_hasher=hasher)

    with pytest.raises(BackendError) as info:
        use_case.get_by_id(1)

    assert info.value.operation == "find_by_id"
    assert isinstance(info.value.__cause__, TimeoutError)


@pytest.mark.parametrize("username", ["", "x" * 255])
def test_impossible_username_is_a_format_error(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, username: str
) -> None:
    use_case = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsFormatError):
        use_case.execute(Credentials(username, "whatever"))


def test_get_by_id_is_a_passthrough(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, alice: User
) -> None:
    use_case = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    user = use_case.get_by_id(alice.require_id())

    assert user is not None and user.username == "alice"
    assert use_case.get_by_id(999) is None


def test_credentials_repr_hides_password() -> None:
    assert "hunter2" not in repr(Credentials("alice", "hunter2"))


def test_register_user_success(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=hasher)

    user = use_case.execute(
        name="Bob",
        email="bob@example.com",
        username="bob",
        password="secret123",
        password_confirm="secret123",
    )

    assert user.id is not None
    assert users.find_by_username("bob") is not None
    assert AuthenticateUserUseCase(users=users, password_hasher=hasher).execute(
        Credentials("bob", "secret123")
    )


def test_register_user_duplicate_raises(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, alice: User
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=hasher)

    with pytest.raises(UserAlreadyExistsError):
        use_case.execute(
            name="",
            email="a2@example.com",
            username="alice",
            password="secret123",
            password_confirm="secret123",
        )


def test_register_user_password_mismatch(
    users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=hasher)

    with pytest.raises(PasswordMismatchError):
        use_case.execute(
            name="",
            email="bob@example.com",
            username="bob",
            password="secret123",
            password_confirm="secret124",
        )
    assert users.saves == 0
