# mini_task_manager/services/__init__.py
from .task_service import count_tasks, create_task, list_tasks, ping

__all__ = ["count_tasks", "create_task", "list_tasks", "ping"]
