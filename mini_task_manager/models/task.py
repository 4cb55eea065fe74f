from sqlalchemy import Column, Integer, String

from mini_task_manager.core.db import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False)
