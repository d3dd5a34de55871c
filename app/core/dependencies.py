"""
Core dependencies for route protection and household role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import role_can
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.households.schemas import MembershipResponse
from app.modules.households.service import HouseholdService, OWNER
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, admin_supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_membership_or_none(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> Optional[MembershipResponse]:
    """Household membership for the current user, resolved once per request."""
    if not hasattr(request.state, "membership"):
        request.state.membership = HouseholdService(supabase).get_membership(user_data["id"])
    return request.state.membership


def get_current_membership(
    membership: Optional[MembershipResponse] = Depends(get_membership_or_none)
) -> MembershipResponse:
    """Household membership for the current user; 404 until onboarding creates one"""
    if membership is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No household found for this user"
        )
    return membership


def is_owner(membership: Optional[MembershipResponse]) -> bool:
    return membership is not None and membership.role == OWNER


def require_household_action(action: str):
    """Factory function to create a household role check dependency"""
    def check_action(
        membership: MembershipResponse = Depends(get_current_membership)
    ) -> MembershipResponse:
        if not role_can(membership.role, action):
            logger.info("User %s (%s) denied %s", membership.user_id, membership.role, action)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only the household owner can perform this action ({action})"
            )
        return membership
    return check_action
