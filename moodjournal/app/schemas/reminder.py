from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

ReminderPriority = Literal["low", "medium", "high"]


class ReminderWrite(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    note: str = Field(..., min_length=1, max_length=2000)
    due_date: date
    priority: ReminderPriority | None = None
    completed: bool | None = None


class ReminderModel(BaseModel):
    id: int
    title: str
    note: str
    due_date: date
    completed: bool
    priority: ReminderPriority
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class ReminderListResponse(BaseModel):
    items: list[ReminderModel]
