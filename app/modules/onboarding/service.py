import logging
from supabase import Client
from app.modules.onboarding.schemas import (
    OnboardingStartResponse, InviteStep, FirstTaskStep, OnboardingStatus
)
from app.modules.households.service import HouseholdService, OWNER
from app.modules.invitations.schemas import InvitationResponse
from app.modules.invitations.service import InvitationService
from app.modules.tasks.schemas import TaskCreate, TaskResponse
from app.modules.tasks.service import TaskService
from app.modules.users.schemas import ProfileUpdate, UserResponse
from app.modules.users.service import UserService
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def default_household_name(email: Optional[str]) -> str:
    local_part = (email or "").split("@")[0] or "My"
    return f"{local_part}'s Household"


class OnboardingService:
    def __init__(self, supabase: Client, admin_supabase: Optional[Client] = None):
        self.supabase = supabase
        self.admin = admin_supabase or supabase

    def start(self, user: Dict[str, Any]) -> OnboardingStartResponse:
        """Make sure the user has a profile and a household, creating both if needed"""
        UserService(self.admin).ensure_profile(user)
        households = HouseholdService(self.admin)
        membership = households.get_membership(user["id"])
        if membership is not None:
            return OnboardingStartResponse(
                household=households.get_household(membership.household_id),
                role=membership.role,
                created=False
            )
        household = households.create_household(default_household_name(user.get("email")), user["id"])
        return OnboardingStartResponse(household=household, role=OWNER, created=True)

    def set_profile_name(self, user_id: str, full_name: str) -> UserResponse:
        return UserService(self.supabase).update_profile(user_id, ProfileUpdate(full_name=full_name))

    def invite_members(self, household_id: str, user_id: str, step: InviteStep) -> List[InvitationResponse]:
        return InvitationService(self.supabase).create_many(household_id, user_id, step.emails)

    def create_first_task(self, household_id: str, user_id: str, step: FirstTaskStep) -> TaskResponse:
        return TaskService(self.supabase).create_task(
            household_id,
            user_id,
            TaskCreate(title=step.title, description=step.description, due_date=step.due_date)
        )

    def complete(self, user_id: str) -> UserResponse:
        profile = UserService(self.supabase).mark_onboarded(user_id)
        logger.info("User %s completed onboarding", user_id)
        return profile

    def status(self, user_id: str) -> OnboardingStatus:
        """Where the user is in the wizard"""
        profile = UserService(self.supabase).get_profile_or_none(user_id)
        households = HouseholdService(self.supabase)
        membership = households.get_membership(user_id)
        household = households.get_household(membership.household_id) if membership else None

        if profile is not None and profile.onboard_success:
            next_step = "done"
        elif profile is None or household is None:
            next_step = "start"
        elif not profile.full_name:
            next_step = "profile"
        else:
            next_step = "invite"

        return OnboardingStatus(
            onboard_success=bool(profile and profile.onboard_success),
            full_name=profile.full_name if profile else None,
            household=household,
            role=membership.role if membership else None,
            next_step=next_step
        )
