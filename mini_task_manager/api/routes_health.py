import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mini_task_manager.core.db import get_db
from mini_task_manager.services.task_service import ping

logger = logging.getLogger(__name__)

INFO_MESSAGE = "Mini Task Manager API is running (MySQL RDS backend)"

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def info():
    return INFO_MESSAGE


@router.get("/health")
def health_check(db: Optional[Session] = Depends(get_db)):
    if db is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "DB_NOT_INITIALIZED"},
        )

    try:
        ping(db)
    except SQLAlchemyError:
        logger.exception("Health check query failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "DB_ERROR"},
        )
    return {"status": "OK"}
