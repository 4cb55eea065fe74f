# mini_task_manager/services/bootstrap.py
"""
Startup sequence that takes the database from an unknown state to ready.

Steps run in order and each must succeed before the next:
validate settings, create the database if missing, create the pooled engine,
create the tasks table if missing, seed it if empty.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from mini_task_manager.core.config import ConfigError, Settings
from mini_task_manager.core.db import Base, make_session_factory
from mini_task_manager.schemas.task import TaskCreate
from mini_task_manager.services.task_service import count_tasks, create_task

logger = logging.getLogger(__name__)

SEED_TASKS: List[Tuple[str, str]] = [
    ("Connect AWS free tier account", "TODO"),
    ("Learn S3, CloudFront, ACM basics", "IN-PROGRESS"),
    ("Deploy backend API on ECS + RDS", "COMING SOON"),
    ("Add CI/CD with GitHub Actions", "COMING SOON"),
]

EngineFactory = Callable[..., Engine]


@dataclass(frozen=True)
class BootstrapResult:
    engine: Optional[Engine] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.engine is not None


def build_server_url(settings: Settings, database: Optional[str] = None) -> URL:
    return URL.create(
        drivername=settings.db_driver,
        username=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        database=database,
    )


def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def ensure_database(admin_engine: Engine, db_name: str) -> None:
    try:
        with admin_engine.connect() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS {quote_identifier(db_name)}"))
            conn.commit()
        logger.info("Ensured database %s exists", db_name)
    finally:
        try:
            admin_engine.dispose()
        except Exception:
            logger.warning("Failed to release admin connection", exc_info=True)


def ensure_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Ensured tasks table exists")


def seed_if_empty(session_factory: sessionmaker) -> int:
    db = session_factory()
    try:
        if count_tasks(db) != 0:
            return 0

        logger.info("Seeding initial tasks...")
        for title, status in SEED_TASKS:
            create_task(db, TaskCreate(title=title, status=status))
        return len(SEED_TASKS)
    finally:
        db.close()


def bootstrap(settings: Settings, engine_factory: EngineFactory = create_engine) -> BootstrapResult:
    engine: Optional[Engine] = None
    try:
        settings.require_database()

        logger.info("Initializing database connection...")
        admin_engine = engine_factory(build_server_url(settings), poolclass=NullPool)
        ensure_database(admin_engine, settings.db_name)

        engine = engine_factory(
            build_server_url(settings, database=settings.db_name),
            pool_size=settings.db_pool_size,
        )
        ensure_schema(engine)
        seed_if_empty(make_session_factory(engine))
    except ConfigError as exc:
        logger.error("Database bootstrap failed: %s", exc)
        return BootstrapResult(error=str(exc))
    except Exception as exc:
        logger.exception("Database bootstrap failed")
        if engine is not None:
            engine.dispose()
        return BootstrapResult(error=str(exc))

    logger.info("Database ready")
    return BootstrapResult(engine=engine)
