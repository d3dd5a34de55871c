from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from app.modules.users.schemas import UserSummary


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    assigned_to_id: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    completed: Optional[bool] = None


class TaskAssign(BaseModel):
    assigned_to_id: Optional[str] = None  # None unassigns


class TaskResponse(BaseModel):
    id: str
    household_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    completed: bool = False
    assigned_to_id: Optional[str] = None
    assignee: Optional[UserSummary] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
