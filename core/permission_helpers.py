from typing import Iterable, List

from core.errors import PermissionDeniedError
from core.permissions import (
    ADMIN_ROLE,
    COARSE_ROLE_NAMES,
    COARSE_WRITE_ROLES,
    DEFAULT_ROLE_NAME,
    SUPER_ADMIN_ROLE,
    VIEW,
)
from models.role import Role


# -----------------------------------------------------
# Fine-grained gate (role permission maps)
# -----------------------------------------------------
def is_super_admin(roles: Iterable[Role]) -> bool:
    return any(role.name == SUPER_ADMIN_ROLE for role in roles)


def is_admin(roles: Iterable[Role]) -> bool:
    return any(role.name == ADMIN_ROLE for role in roles)


def has_permission(roles: Iterable[Role], permission: str) -> bool:
    roles = list(roles)

    # Super admin = master key, even for unknown keys
    if is_super_admin(roles):
        return True

    # "view" satisfies any check against the key
    return any(
        role.permissions.get(permission) is True
        or role.permissions.get(permission) == VIEW
        for role in roles
    )


def require_permission(roles: Iterable[Role], permission: str):
    if not has_permission(roles, permission):
        raise PermissionDeniedError(f"Insufficient permissions: '{permission}' required")


# -----------------------------------------------------
# Coarse gate (hard-coded UI role literal)
# -----------------------------------------------------
def coarse_role(roles: List[Role]) -> str:
    """
    Collapse the resolved roles onto the single role literal the UI
    compares against. Only the two admin roles map to a literal of
    their own; everything else, including no roles, is the default "user".
    """
    if is_super_admin(roles):
        return COARSE_ROLE_NAMES[SUPER_ADMIN_ROLE]
    if is_admin(roles):
        return COARSE_ROLE_NAMES[ADMIN_ROLE]
    return DEFAULT_ROLE_NAME


def can_modify(roles: List[Role]) -> bool:
    return coarse_role(roles) in COARSE_WRITE_ROLES


def require_write_role(roles: List[Role]):
    if not can_modify(roles):
        raise PermissionDeniedError("Admin or superAdmin role required for this action")
