from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, model_validator
from enum import Enum
from datetime import datetime
from typing import Optional

class TaskStatus(str, Enum):
    open = "open"
    doing = "doing"
    done = "done"

class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    # required, but may be empty
    description: str
    status: TaskStatus = TaskStatus.open

class TaskUpdate(BaseModel):
    """Partial update. Only fields the client actually sent are applied."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    @model_validator(mode="after")
    def _reject_nulls(self) -> "TaskUpdate":
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields may not be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)

class Task(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
