# models/user.py

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """
    Used when a super admin creates an account with an initial role.
    """
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: str = "user"


class UserRoleUpdate(BaseModel):
    """Replaces every role the user currently holds."""
    role: str


class UserRead(BaseModel):
    id: str
    email: str
    role: str
