from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from .role import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SessionIdentity(BaseModel):
    """The authenticated Supabase user, reduced to what the app needs."""
    user_id: str
    email: Optional[str] = None


class SessionRead(BaseModel):
    authenticated: bool
    loading: bool
    identity: Optional[SessionIdentity] = None
    roles: List[Role] = []
    coarse_role: str
    is_admin: bool
    is_super_admin: bool
    error: Optional[str] = None


class OAuthRedirect(BaseModel):
    provider: str
    url: str
