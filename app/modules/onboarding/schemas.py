from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from typing import Optional, List, Literal
from datetime import date

from app.modules.households.schemas import HouseholdResponse


class OnboardingStartResponse(BaseModel):
    household: HouseholdResponse
    role: str
    created: bool


class ProfileStep(BaseModel):
    full_name: str


class InviteStep(BaseModel):
    emails: List[str] = []

    @field_validator("emails")
    @classmethod
    def check_emails(cls, emails: List[str]) -> List[str]:
        for email in emails:
            if email and email.strip():
                validate_email(email.strip())
        return emails


class FirstTaskStep(BaseModel):
    title: str = "Welcome Task"
    description: Optional[str] = None
    due_date: Optional[date] = None


class OnboardingStatus(BaseModel):
    onboard_success: bool
    full_name: Optional[str] = None
    household: Optional[HouseholdResponse] = None
    role: Optional[str] = None
    next_step: Literal["start", "profile", "invite", "done"]
