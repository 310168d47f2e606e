"""
Tasks module - the task list the hosted agent works on.
"""

from src.tasks.models import Base, Task
from src.tasks.task_service import TaskNotFoundError, TaskService

__all__ = ["Base", "Task", "TaskNotFoundError", "TaskService"]
