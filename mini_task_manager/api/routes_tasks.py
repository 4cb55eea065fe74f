# mini_task_manager/api/routes_tasks.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mini_task_manager.core.db import get_db
from mini_task_manager.schemas.task import TaskRead
from mini_task_manager.services.task_service import list_tasks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _fetch_failed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to fetch tasks"},
    )


@router.get("", response_model=List[TaskRead])
def list_tasks_endpoint(db: Optional[Session] = Depends(get_db)):
    if db is None:
        logger.error("Error fetching tasks from DB: pool not initialized")
        return _fetch_failed()

    try:
        tasks = list_tasks(db)
    except SQLAlchemyError:
        logger.exception("Error fetching tasks from DB")
        return _fetch_failed()
    return [TaskRead.model_validate(t) for t in tasks]
