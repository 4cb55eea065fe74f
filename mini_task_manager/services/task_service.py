# mini_task_manager/services/task_service.py
from typing import List

from sqlalchemy import func, text
from sqlalchemy.orm import Session

from mini_task_manager.models.task import Task
from mini_task_manager.schemas.task import TaskCreate


def create_task(db: Session, task_in: TaskCreate) -> Task:

    db_task = Task(
        title=task_in.title,
        status=task_in.status,
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def count_tasks(db: Session) -> int:

    return db.query(func.count(Task.id)).scalar() or 0


def list_tasks(db: Session) -> List[Task]:

    return db.query(Task).order_by(Task.id).all()


def ping(db: Session) -> None:
    db.execute(text("SELECT 1"))
