import calendar
import logging
from datetime import date
from supabase import Client
from app.modules.calendar.schemas import EventCreate, EventResponse, MonthResponse
from app.modules.tasks.service import TaskService
from app.modules.users.service import UserService
from typing import Any, Dict, List, Optional, Tuple
from fastapi import HTTPException

logger = logging.getLogger(__name__)

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month"""
    if not 1 <= month <= 12:
        raise HTTPException(status_code=422, detail="Month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_grid(year: int, month: int) -> List[List[Optional[date]]]:
    """Weeks of the month, Sunday first, with None for days belonging to neighbouring months"""
    month_range(year, month)
    return [
        [date(year, month, day) if day else None for day in week]
        for week in _SUNDAY_FIRST.monthdayscalendar(year, month)
    ]


class CalendarService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _with_creators(self, rows: List[Dict[str, Any]]) -> List[EventResponse]:
        profiles = UserService(self.supabase).get_profiles([row.get("created_by") for row in rows])
        events = []
        for row in rows:
            event = EventResponse(**row)
            if event.created_by:
                event.creator = profiles.get(event.created_by)
            events.append(event)
        return events

    def list_events(self, household_id: str, start: date, end: date) -> List[EventResponse]:
        """Events between two dates (inclusive), earliest first"""
        try:
            result = self.supabase.table("calendar_events")\
                .select("*")\
                .eq("household_id", household_id)\
                .gte("event_date", f"{start.isoformat()}T00:00:00")\
                .lte("event_date", f"{end.isoformat()}T23:59:59.999999")\
                .order("event_date")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching events: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return self._with_creators(result.data or [])

    def get_month(self, household_id: str, year: int, month: int) -> MonthResponse:
        """Tasks due and events happening in a month, plus the month grid"""
        start, end = month_range(year, month)
        return MonthResponse(
            year=year,
            month=month,
            start_date=start,
            end_date=end,
            weeks=month_grid(year, month),
            tasks=TaskService(self.supabase).list_due_between(household_id, start, end),
            events=self.list_events(household_id, start, end)
        )

    def create_event(self, household_id: str, user_id: str, event_data: EventCreate) -> EventResponse:
        """Add an event to the household calendar"""
        title = event_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Event title is required")
        try:
            result = self.supabase.table("calendar_events").insert({
                "household_id": household_id,
                "title": title,
                "event_date": event_data.event_date.isoformat(),
                "event_location": event_data.event_location,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create event")

            return self._with_creators(result.data[:1])[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding event: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_event(self, household_id: str, event_id: str) -> EventResponse:
        try:
            result = self.supabase.table("calendar_events")\
                .select("*")\
                .eq("id", event_id)\
                .eq("household_id", household_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Event not found")
        return self._with_creators(result.data)[0]

    def delete_event(self, household_id: str, event_id: str) -> bool:
        """Delete event"""
        self.get_event(household_id, event_id)
        try:
            result = self.supabase.table("calendar_events")\
                .delete()\
                .eq("id", event_id)\
                .eq("household_id", household_id)\
                .execute()
            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Error deleting event {event_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
