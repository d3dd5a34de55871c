from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileUpdate(BaseModel):
    full_name: str


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    onboard_success: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
