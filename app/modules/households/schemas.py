from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class HouseholdUpdate(BaseModel):
    name: str


class HouseholdResponse(BaseModel):
    id: str
    name: str
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MembershipResponse(BaseModel):
    household_id: str
    user_id: str
    role: str


class HouseholdMemberResponse(BaseModel):
    user_id: str
    role: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class MyHouseholdResponse(BaseModel):
    household: HouseholdResponse
    role: str
    permissions: List[str]
