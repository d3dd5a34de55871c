from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

from app.modules.tasks.schemas import TaskResponse
from app.modules.users.schemas import UserSummary


class EventCreate(BaseModel):
    title: str
    event_date: datetime
    event_location: Optional[str] = None


class EventResponse(BaseModel):
    id: str
    household_id: str
    title: str
    event_date: datetime
    event_location: Optional[str] = None
    created_by: Optional[str] = None
    creator: Optional[UserSummary] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MonthResponse(BaseModel):
    year: int
    month: int
    start_date: date
    end_date: date
    weeks: List[List[Optional[date]]]  # Sunday first; None pads days outside the month
    tasks: List[TaskResponse]
    events: List[EventResponse]
