from pydantic import BaseModel, EmailStr
from typing import Optional, List, Dict, Any


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class OAuthUrlResponse(BaseModel):
    provider: str
    url: str


class OAuthCallbackRequest(BaseModel):
    code: str


class RefreshRequest(BaseModel):
    refresh_token: str


class SessionResponse(BaseModel):
    user: Dict[str, Any]
    profile: Optional[Dict[str, Any]] = None
    household_id: Optional[str] = None
    role: Optional[str] = None
    permissions: List[str] = []
