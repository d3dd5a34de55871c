from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.households.schemas import (
    HouseholdUpdate, HouseholdResponse, HouseholdMemberResponse, MembershipResponse,
    MyHouseholdResponse
)
from app.modules.households.service import HouseholdService
from app.core.dependencies import require_household_action
from app.config.permissions_config import get_role_permissions
from supabase import Client
from typing import List

router = APIRouter(prefix="/households", tags=["households"])


def get_household_service(supabase: Client = Depends(get_supabase)) -> HouseholdService:
    return HouseholdService(supabase)


@router.get("/me", response_model=MyHouseholdResponse)
async def get_my_household(
    membership: MembershipResponse = Depends(require_household_action("households:read")),
    service: HouseholdService = Depends(get_household_service)
):
    """Get the current user's household and role"""
    return MyHouseholdResponse(
        household=service.get_household(membership.household_id),
        role=membership.role,
        permissions=get_role_permissions(membership.role)
    )


@router.put("/me", response_model=HouseholdResponse)
async def update_my_household(
    household_data: HouseholdUpdate,
    membership: MembershipResponse = Depends(require_household_action("households:update")),
    service: HouseholdService = Depends(get_household_service)
):
    """Rename the household (owner only)"""
    return service.update_household(membership.household_id, household_data)


@router.get("/me/members", response_model=List[HouseholdMemberResponse])
async def list_members(
    membership: MembershipResponse = Depends(require_household_action("members:read")),
    service: HouseholdService = Depends(get_household_service)
):
    """List all members of the household"""
    return service.list_members(membership.household_id)


@router.delete("/me/members/{user_id}", status_code=204)
async def remove_member(
    user_id: str,
    membership: MembershipResponse = Depends(require_household_action("members:remove")),
    service: HouseholdService = Depends(get_household_service)
):
    """Remove a member from the household (owner only)"""
    service.remove_member(membership.household_id, user_id, membership.user_id)
    return None
