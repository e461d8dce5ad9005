from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TaskFields(BaseModel):
    """Caller-supplied fields of a new task; the store adds id and timestamps."""

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None


class TaskStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


class TaskInput(BaseModel):
    """JSON body for create/update; validation happens in the task actions."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None


class ToggleRequest(BaseModel):
    current_status: Optional[str] = None


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class ActionResult(BaseModel):
    success: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    task_id: Optional[str] = None

    @classmethod
    def ok(cls, task_id: Optional[str] = None) -> "ActionResult":
        return cls(success=True, task_id=task_id)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "ActionResult":
        return cls(success=False, error=message, kind=kind)
