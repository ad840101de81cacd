from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from protohub.schemas.validators import reject_null


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"
    pending = "pending"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class RecurrencePattern(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: str = Field("#0EA5E9", pattern=r"^#[0-9A-Fa-f]{6}$")


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")

    @field_validator("name", "color")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ProjectOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    color: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[datetime] = None
    project_id: int
    assignee_id: Optional[str] = None
    progress: int = Field(0, ge=0, le=100)
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None

    @model_validator(mode="after")
    def recurring_needs_pattern(self):
        if self.is_recurring and self.recurrence_pattern is None:
            raise ValueError("recurrence_pattern is required for recurring tasks")
        return self


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[RecurrencePattern] = None

    @field_validator("title", "status", "priority", "progress", "is_recurring")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[datetime] = None
    project_id: int
    assignee_id: Optional[str] = None
    owner_id: Optional[str] = None
    progress: int
    is_recurring: bool
    recurrence_pattern: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
