from __future__ import annotations

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "authcore-tests.log"))

import pytest  # noqa: E402

from authcore.application.services.password_hashing import WerkzeugPasswordHasher  # noqa: E402
from authcore.domain.users.entities import User  # noqa: E402
from authcore.shared.errors.base import BackendError  # noqa: E402

CURRENT_METHOD = "pbkdf2:sha256:1000"
LEGACY_METHOD = "pbkdf2:sha256:500"


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.saves = 0

    def find_by_username(self, username: str) -> User | None:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def save(self, user: User) -> User:
        self.saves += 1
        if user.id is None:
            user = User(
                id=self._seq,
                username=user.username,
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
            )
            self._seq += 1
        self._users[user.id] = user
        return user


class BrokenUserRepository(InMemoryUserRepository):
    """Reads work, writes fail like a lost connection."""

    def save(self, user: User) -> User:
        if user.id is None:
            return super().save(user)
        raise ConnectionError("database went away")


class UnreachableUserRepository(InMemoryUserRepository):
    def find_by_username(self, username: str) -> User | None:
        raise BackendError("find_by_username") from ConnectionError("refused")


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def deliver_reset_link(self, destination: str, token: str, uidb64: str) -> None:
        self.sent.append((destination, token, uidb64))


@pytest.fixture(scope="session")
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=CURRENT_METHOD)


@pytest.fixture(scope="session")
def legacy_hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=LEGACY_METHOD)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def alice(users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher) -> User:
    return users.save(
        User(
            username="alice",
            name="Alice Liddell",
            email="alice@example.com",
            password_hash=hasher.hash("correct-horse"),
        )
    )
