import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy import Engine

from mini_task_manager.api.routes_health import router as health_router
from mini_task_manager.api.routes_tasks import router as tasks_router
from mini_task_manager.core.config import get_settings
from mini_task_manager.core.db import make_session_factory
from mini_task_manager.core.logging import setup_logging
from mini_task_manager.services.bootstrap import bootstrap

logger = logging.getLogger(__name__)


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """Build the API around an already-bootstrapped engine, or none at all."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="Mini Task Manager API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.session_factory = make_session_factory(engine) if engine is not None else None

    app.include_router(health_router)
    app.include_router(tasks_router)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    result = bootstrap(settings)
    if not result.ok:
        logger.error("Failed to initialize DB: %s", result.error)
        sys.exit(1)

    app = create_app(result.engine)
    # uvicorn logs the bound address itself once the socket is listening
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
