import hashlib
import logging
import time
from supabase import Client
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, OAuthUrlResponse
)
from app.modules.users.service import UserService
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _user_to_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
        "updated_at": user.updated_at
    }


class AuthService:
    def __init__(self, supabase: Client, admin_supabase: Optional[Client] = None):
        self.supabase = supabase
        self.profiles = UserService(admin_supabase or supabase)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {}
            if register_data.full_name:
                user_metadata["full_name"] = register_data.full_name

            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            logger.error(f"Registration failed for {register_data.email}: {error_message}")
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = str(e)
            logger.error(f"Login failed for {login_data.email}: {error_message}")
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return self._session_tokens(auth_response, fallback_email=login_data.email)

    def oauth_url(self, provider: Optional[str] = None, redirect_to: Optional[str] = None) -> OAuthUrlResponse:
        """Build the provider sign-in URL; the browser follows it and comes back with a code"""
        provider = provider or settings.oauth_provider
        options = {}
        redirect = redirect_to or settings.oauth_redirect_url
        if redirect:
            options["redirect_to"] = redirect
        try:
            response = self.supabase.auth.sign_in_with_oauth({
                "provider": provider,
                "options": options
            })
        except Exception as e:
            logger.error(f"OAuth sign-in with {provider} failed: {e}")
            raise HTTPException(status_code=400, detail=f"{provider} authentication failed")
        return OAuthUrlResponse(provider=provider, url=response.url)

    def exchange_code(self, code: str) -> TokenResponse:
        """Finish an OAuth redirect by trading the code for a session"""
        try:
            auth_response = self.supabase.auth.exchange_code_for_session({"auth_code": code})
        except Exception as e:
            logger.error(f"OAuth code exchange failed: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired authorization code")
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired authorization code")
        return self._session_tokens(auth_response)

    def refresh(self, refresh_token: str) -> TokenResponse:
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
        except Exception as e:
            logger.error(f"Session refresh failed: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
        return self._session_tokens(auth_response, mirror=False)

    def _session_tokens(self, auth_response, fallback_email: str = "", mirror: bool = True) -> TokenResponse:
        user = auth_response.user
        session = auth_response.session
        if mirror:
            self.profiles.ensure_profile(_user_to_dict(user))
        return TokenResponse(
            access_token=session.access_token,
            refresh_token=getattr(session, "refresh_token", None),
            token_type="bearer",
            expires_in=getattr(session, "expires_in", None),
            user_id=user.id,
            email=user.email or fallback_email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user_data = _user_to_dict(user_response.user)
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Access tokens are stateless JWTs; they stay valid until they expire
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.error(f"Logout error: {e}")
            return False
