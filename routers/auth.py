from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.logging_config import logger
from core.roles import RoleResolver
from core.session import SessionManager
from core.permissions import PERMISSION_KEYS, USERS
from dependencies.auth import (
    get_current_session,
    get_role_resolver,
    get_session_manager,
    requires_permission,
)
from models.auth import LoginRequest, OAuthRedirect, SessionRead, SignupRequest


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=SessionRead, summary="Sign in with email + password")
async def login(payload: LoginRequest, session: SessionManager = Depends(get_session_manager)):
    email = payload.email.strip().lower()
    return await session.sign_in(email, payload.password)


# ============================================================
# SIGN UP
# ============================================================
@router.post("/signup", response_model=SessionRead, summary="Create an account")
async def signup(payload: SignupRequest, session: SessionManager = Depends(get_session_manager)):
    email = payload.email.strip().lower()
    return await session.sign_up(email, payload.password)


# ============================================================
# OAUTH (provider redirect URL)
# ============================================================
@router.get("/oauth/{provider}", response_model=OAuthRedirect, summary="OAuth sign-in URL")
async def oauth(
    provider: str,
    redirect_to: Optional[str] = Query(None),
    session: SessionManager = Depends(get_session_manager),
):
    url = await session.oauth_url(provider, redirect_to)
    return OAuthRedirect(provider=provider, url=url)


# ============================================================
# LOGOUT (global scope)
# ============================================================
@router.post("/logout", response_model=SessionRead, summary="Sign out on all devices")
async def logout(session: SessionManager = Depends(get_session_manager)):
    await session.sign_out()
    return session.snapshot()


# ============================================================
# CURRENT SESSION
# ============================================================
@router.get("/me", response_model=SessionRead, summary="Current session, roles and coarse role")
async def read_me(session: SessionManager = Depends(get_session_manager)):
    return session.snapshot()


# ============================================================
# OWN PERMISSIONS (one flag per application view)
# ============================================================
@router.get("/permissions", summary="Permission flags for the signed-in user")
async def my_permissions(session: SessionManager = Depends(get_current_session)):
    return {key: session.has_permission(key) for key in PERMISSION_KEYS}


# ============================================================
# STANDALONE PERMISSION CHECK
# ============================================================
@router.get(
    "/permissions/{user_id}/{permission}",
    summary="Check a permission for any user",
    dependencies=[Depends(requires_permission(USERS))],
)
async def check_permission(
    user_id: str,
    permission: str,
    resolver: RoleResolver = Depends(get_role_resolver),
):
    allowed = await resolver.has_permission(user_id, permission)
    logger.info(f"Permission check {user_id}:{permission} → {allowed}")
    return {"user_id": user_id, "permission": permission, "allowed": allowed}
