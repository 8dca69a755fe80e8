# models/role.py

from typing import Dict, Optional, Union
from pydantic import BaseModel, Field


# permission key → True / False / "view"
PermissionValue = Union[bool, str]


class Role(BaseModel):
    """
    Row of the `roles` table. Administered outside this app.
    """
    id: str
    name: str
    description: Optional[str] = None
    permissions: Dict[str, PermissionValue] = Field(default_factory=dict)


class UserRoleAssignment(BaseModel):
    """Row of the `user_roles` join table."""
    user_id: str
    role_id: str
