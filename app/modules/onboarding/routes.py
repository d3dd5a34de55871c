from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.onboarding.schemas import (
    OnboardingStartResponse, ProfileStep, InviteStep, FirstTaskStep, OnboardingStatus
)
from app.modules.onboarding.service import OnboardingService
from app.modules.households.schemas import MembershipResponse
from app.modules.invitations.schemas import InvitationResponse
from app.modules.tasks.schemas import TaskResponse
from app.modules.users.schemas import UserResponse
from app.core.dependencies import get_current_user_id, require_household_action
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def get_onboarding_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_service_supabase)
) -> OnboardingService:
    return OnboardingService(supabase, admin_supabase)


@router.get("/status", response_model=OnboardingStatus)
async def get_status(
    current_user: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Which wizard step the user should see next"""
    return service.status(current_user["id"])


@router.post("/start", response_model=OnboardingStartResponse)
async def start(
    current_user: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Create (or fetch) the user's profile and household"""
    return service.start(current_user)


@router.put("/profile", response_model=UserResponse)
async def set_profile(
    step: ProfileStep,
    current_user: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Welcome step: set the display name"""
    return service.set_profile_name(current_user["id"], step.full_name)


@router.post("/invites", response_model=List[InvitationResponse], status_code=201)
async def invite_members(
    step: InviteStep,
    membership: MembershipResponse = Depends(require_household_action("invitations:create")),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Invite step: one invitation per non-blank email"""
    return service.invite_members(membership.household_id, membership.user_id, step)


@router.post("/task", response_model=TaskResponse, status_code=201)
async def create_first_task(
    step: FirstTaskStep,
    membership: MembershipResponse = Depends(require_household_action("tasks:create")),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """First task step"""
    return service.create_first_task(membership.household_id, membership.user_id, step)


@router.post("/complete", response_model=UserResponse)
async def complete(
    current_user: Dict = Depends(get_current_user_id),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Mark onboarding as finished"""
    return service.complete(current_user["id"])
