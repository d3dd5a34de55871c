from datetime import date
from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.calendar.schemas import EventCreate, EventResponse, MonthResponse
from app.modules.calendar.service import CalendarService
from app.modules.households.schemas import MembershipResponse
from app.core.dependencies import require_household_action
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/calendar", tags=["calendar"])


def get_calendar_service(supabase: Client = Depends(get_supabase)) -> CalendarService:
    return CalendarService(supabase)


@router.get("", response_model=MonthResponse)
async def get_month(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    membership: MembershipResponse = Depends(require_household_action("events:read")),
    service: CalendarService = Depends(get_calendar_service)
):
    """Month view: grid, tasks due and events (defaults to the current month)"""
    today = date.today()
    return service.get_month(
        membership.household_id,
        today.year if year is None else year,
        today.month if month is None else month
    )


@router.get("/events", response_model=List[EventResponse])
async def list_events(
    start: date,
    end: date,
    membership: MembershipResponse = Depends(require_household_action("events:read")),
    service: CalendarService = Depends(get_calendar_service)
):
    """List events between two dates (inclusive)"""
    return service.list_events(membership.household_id, start, end)


@router.post("/events", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    membership: MembershipResponse = Depends(require_household_action("events:create")),
    service: CalendarService = Depends(get_calendar_service)
):
    """Add an event to the household calendar"""
    return service.create_event(membership.household_id, membership.user_id, event_data)


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    membership: MembershipResponse = Depends(require_household_action("events:read")),
    service: CalendarService = Depends(get_calendar_service)
):
    return service.get_event(membership.household_id, event_id)


@router.delete("/events/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    membership: MembershipResponse = Depends(require_household_action("events:delete")),
    service: CalendarService = Depends(get_calendar_service)
):
    """Delete an event"""
    service.delete_event(membership.household_id, event_id)
    return None
