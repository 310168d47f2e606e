"""
Task Service - CRUD over the task list

Each call opens its own database session from the supplied factory, so the
service can be shared by the API layer and the agent.

Error Handling:
- ValueError: Title is empty
- TaskNotFoundError: No task with the given id
"""

from typing import Callable, List, Optional
import structlog
from sqlalchemy.orm import Session

from src.tasks.models import Task

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 200


class TaskNotFoundError(LookupError):
    """Raised when a task id does not exist."""
    
    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskService:
    """
    Task list operations.
    
    Example:
        service = TaskService(SessionLocal)
        task = service.create_task("Buy milk")
        service.complete_task(task["id"])
    """
    
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
    
    def list_tasks(self, include_completed: bool = True) -> List[dict]:
        with self._session_factory() as db:
            query = db.query(Task)
            if not include_completed:
                query = query.filter(Task.completed.is_(False))
            return [task.to_dict() for task in query.order_by(Task.id).all()]
    
    def get_task(self, task_id: int) -> dict:
        with self._session_factory() as db:
            return self._load(db, task_id).to_dict()
    
    def create_task(self, title: str, description: Optional[str] = None) -> dict:
        """
        Create a task.
        
        Args:
            title: Short task title (required, max 200 characters)
            description: Optional free-form details
            
        Raises:
            ValueError: If title is empty or too long
        """
        title = (title or "").strip()
        if not title:
            raise ValueError("Task title must not be empty")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValueError(f"Task title must be at most {MAX_TITLE_LENGTH} characters")
        
        with self._session_factory() as db:
            task = Task(title=title, description=description)
            db.add(task)
            db.commit()
            db.refresh(task)
            
            logger.info("task_created", task_id=task.id)
            return task.to_dict()
    
    def complete_task(self, task_id: int) -> dict:
        with self._session_factory() as db:
            task = self._load(db, task_id)
            task.completed = True
            db.commit()
            db.refresh(task)
            
            logger.info("task_completed", task_id=task_id)
            return task.to_dict()
    
    def delete_task(self, task_id: int) -> None:
        with self._session_factory() as db:
            task = self._load(db, task_id)
            db.delete(task)
            db.commit()
            
            logger.info("task_deleted", task_id=task_id)
    
    @staticmethod
    def _load(db: Session, task_id: int) -> Task:
        task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
