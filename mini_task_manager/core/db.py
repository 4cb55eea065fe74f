# mini_task_manager/core/db.py
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):

    pass


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
    )


def get_db(request: Request) -> Iterator[Optional[Session]]:
    """Yield a session from the app's pool, or None when no pool was wired."""
    session_factory = request.app.state.session_factory
    if session_factory is None:
        yield None
        return

    db = session_factory()
    try:
        yield db
    finally:
        db.close()
