# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from authcore.shared.config import load_config
from authcore.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def build_engine(url: str | None = None) -> Engine:
    database = _config.database
    url = url or database.url
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            future=True,
            connect_args={
                "check_same_thread": False,
                "timeout": int(database.pool_timeout),
            },
        )
    return create_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
    )


ENGINE: Engine = build_engine()


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


@contextmanager
def session_scope(factory: Callable[[], Session] | None = None) -> Iterator[Session]:
    session = (factory or SessionLocal)()
    logger.debug("db.session: opened session")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed session")
    except Exception:
        logger.warning("db.session: error, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        if factory is None:
            SessionLocal.remove()
        logger.debug("db.session: closed session")


def init_db(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or ENGINE)
    logger.info("Database schema ensured")
