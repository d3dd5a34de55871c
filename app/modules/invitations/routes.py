from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.invitations.schemas import InvitationCreate, InvitationResponse
from app.modules.invitations.service import InvitationService
from app.modules.households.schemas import MembershipResponse
from app.core.dependencies import get_current_user_id, require_household_action
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/invitations", tags=["invitations"])


def get_invitation_service(supabase: Client = Depends(get_supabase)) -> InvitationService:
    return InvitationService(supabase)


@router.post("", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    invitation_data: InvitationCreate,
    membership: MembershipResponse = Depends(require_household_action("invitations:create")),
    service: InvitationService = Depends(get_invitation_service)
):
    """Invite a new member by email (owner only)"""
    return service.create_invitation(membership.household_id, membership.user_id, invitation_data.invitee_email)


@router.get("/sent", response_model=List[InvitationResponse])
async def list_sent(
    membership: MembershipResponse = Depends(require_household_action("invitations:read")),
    service: InvitationService = Depends(get_invitation_service)
):
    """Invitations sent by the current user (owner only)"""
    return service.list_sent(membership.household_id, membership.user_id)


@router.get("/received", response_model=List[InvitationResponse])
async def list_received(
    current_user: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service)
):
    """Pending invitations addressed to the current user"""
    return service.list_received(current_user.get("email"))


@router.post("/{invitation_id}/accept", response_model=InvitationResponse)
async def accept_invitation(
    invitation_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service)
):
    """Accept an invitation and join the household"""
    return service.accept(invitation_id, current_user)


@router.post("/{invitation_id}/decline", response_model=InvitationResponse)
async def decline_invitation(
    invitation_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service)
):
    return service.decline(invitation_id, current_user)
