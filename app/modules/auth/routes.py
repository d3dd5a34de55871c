from fastapi import APIRouter, Depends, Request
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    OAuthUrlResponse, OAuthCallbackRequest, RefreshRequest, SessionResponse
)
from app.modules.auth.service import AuthService
from app.modules.users.service import UserService
from app.core.dependencies import (
    get_auth_service, get_current_token, get_current_user_id, get_membership_or_none
)
from app.core.limiter import limiter
from app.config.permissions_config import get_role_permissions
from app.config.settings import settings
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.get("/oauth", response_model=OAuthUrlResponse)
async def oauth_url(
    provider: Optional[str] = None,
    redirect_to: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Get the OAuth provider URL to redirect the browser to"""
    return service.oauth_url(provider, redirect_to)


@router.post("/oauth/callback", response_model=TokenResponse)
async def oauth_callback(
    body: OAuthCallbackRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange the OAuth redirect code for a session"""
    return service.exchange_code(body.code)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Refresh an expired access token"""
    return service.refresh(body.refresh_token)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/session", response_model=SessionResponse)
async def get_session(
    current_user: Dict = Depends(get_current_user_id),
    membership=Depends(get_membership_or_none),
    supabase: Client = Depends(get_supabase)
):
    """Current user, profile and household role (for frontend UI)"""
    profile = UserService(supabase).get_profile_or_none(current_user["id"])
    return SessionResponse(
        user=current_user,
        profile=profile.model_dump() if profile else None,
        household_id=membership.household_id if membership else None,
        role=membership.role if membership else None,
        permissions=get_role_permissions(membership.role) if membership else []
    )
