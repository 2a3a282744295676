# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.domain.users.entities import PasswordHash
from authcore.domain.users.entities import User as DomainUser
from authcore.domain.users.repositories import UserRepository
from authcore.infrastructure.db.models import User
from authcore.infrastructure.db.session import SessionLocal, session_scope
from authcore.shared.errors.base import BackendError
from authcore.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        name=row.name,
        email=row.email,
        password_hash=PasswordHash(row.password_hash),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(User).filter(User.username == username).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise BackendError("find_by_username") from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise BackendError("find_by_id") from exc

    def save(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                if user.id is None:
                    row = User(
                        username=user.username,
                        name=user.name,
                        email=user.email,
                        password_hash=user.password_hash.encoded,
                    )
                    session.add(row)
                else:
                    row = session.get(User, user.id)
                    if row is None:
                        raise BackendError("save", context={"user_id": user.id})
                    row.name = user.name
                    row.email = user.email
                    row.password_hash = user.password_hash.encoded
                session.flush()
                logger.debug(f"users.repo: saved user_id={row.id}")
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise BackendError("save") from exc
