# mini_task_manager/schemas/task.py
from pydantic import BaseModel, ConfigDict, Field


class TaskBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    status: str = Field(min_length=1, max_length=50)


class TaskCreate(TaskBase):
    pass


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    status: str
