from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class InvitationCreate(BaseModel):
    invitee_email: EmailStr


class InvitationResponse(BaseModel):
    id: str
    household_id: str
    invitee_email: str
    inviter_id: str
    status: str = "pending"
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
