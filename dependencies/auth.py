from fastapi import Depends, Request

from core.errors import NotAuthenticatedError, PermissionDeniedError, StoreConnectionError
from core.permission_helpers import is_super_admin, require_permission, require_write_role
from core.roles import RoleResolver
from core.session import SessionManager
from core.state import ChurchState
from services.users import UserAdminService


# ============================================================
# Providers: objects built by the app lifespan (main.py)
# ============================================================
def get_session_manager(request: Request) -> SessionManager:
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise StoreConnectionError("Supabase client not configured")
    return session


def get_church_state(request: Request) -> ChurchState:
    state = getattr(request.app.state, "church", None)
    if state is None:
        raise StoreConnectionError("Supabase client not configured")
    return state


def get_role_resolver(request: Request) -> RoleResolver:
    resolver = getattr(request.app.state, "role_resolver", None)
    if resolver is None:
        raise StoreConnectionError("Supabase client not configured")
    return resolver


def get_user_admin(request: Request) -> UserAdminService:
    service = getattr(request.app.state, "user_admin", None)
    if service is None:
        raise StoreConnectionError("User management requires SUPABASE_SERVICE_ROLE_KEY")
    return service


# ============================================================
# AUTHENTICATED SESSION
# ============================================================
def get_current_session(session: SessionManager = Depends(get_session_manager)) -> SessionManager:
    if not session.authenticated:
        raise NotAuthenticatedError("Not signed in")
    return session


# ============================================================
# PERMISSION CHECK (role permission maps)
# ============================================================
def requires_permission(permission: str):
    """
    Usage:
        @router.get("", dependencies=[Depends(requires_permission("members"))])
    """

    def dependency(session: SessionManager = Depends(get_current_session)):
        require_permission(session.roles, permission)
        return session

    return dependency


# ============================================================
# COARSE ROLE CHECK (Admin / superAdmin only)
# ============================================================
def requires_write_role():
    def dependency(session: SessionManager = Depends(get_current_session)):
        require_write_role(session.roles)
        return session

    return dependency


def requires_super_admin():
    def dependency(session: SessionManager = Depends(get_current_session)):
        if not is_super_admin(session.roles):
            raise PermissionDeniedError("Only Super Administrators can access this page.")
        return session

    return dependency
