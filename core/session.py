# core/session.py

import asyncio
import inspect
from typing import Awaitable, Callable, List, Optional, Union

from supabase import AsyncClient

from core.errors import (
    NotAuthenticatedError,
    RemoteWriteError,
    extract_supabase_error,
)
from core.local_storage import LocalStorage
from core.logging_config import logger
from core.permission_helpers import (
    coarse_role,
    has_permission,
    is_admin,
    is_super_admin,
)
from core.roles import RoleResolver, effective_roles
from models.auth import SessionIdentity, SessionRead
from models.role import Role


SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

SessionListener = Callable[[str, "SessionManager"], Union[Awaitable[None], None]]


class SessionManager:
    """
    Holds the single authenticated identity of this process and its
    resolved roles.

    Lifecycle:
        Unknown ──initialize()──▶ Authenticated | Anonymous
        Authenticated ──sign_out() / pushed sign-out──▶ Anonymous

    Identity and roles are always swapped together, so no caller can
    observe an identity without its roles.
    """

    def __init__(self, client: AsyncClient, resolver: RoleResolver, storage: LocalStorage):
        self.client = client
        self.resolver = resolver
        self.storage = storage

        self.identity: Optional[SessionIdentity] = None
        self.roles: List[Role] = []
        self.loading = True
        self.error: Optional[str] = None

        self._listeners: List[SessionListener] = []
        self._subscription = None
        self._pending: set = set()

    # ============================================================
    # State
    # ============================================================
    @property
    def authenticated(self) -> bool:
        return self.identity is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.identity.user_id if self.identity else None

    def snapshot(self) -> SessionRead:
        return SessionRead(
            authenticated=self.authenticated,
            loading=self.loading,
            identity=self.identity,
            roles=self.roles,
            coarse_role=coarse_role(self.roles),
            is_admin=is_admin(self.roles),
            is_super_admin=is_super_admin(self.roles),
            error=self.error,
        )

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.roles, permission)

    def require_authenticated(self) -> SessionIdentity:
        if self.identity is None:
            raise NotAuthenticatedError("Not signed in")
        return self.identity

    # ============================================================
    # Observers
    # ============================================================
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for SIGNED_IN / SIGNED_OUT; returns the unsubscribe handle."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self, event: str):
        for listener in list(self._listeners):
            result = listener(event, self)
            if inspect.isawaitable(result):
                await result

    # ============================================================
    # Transitions
    # ============================================================
    def _set(self, identity: Optional[SessionIdentity], roles: List[Role]):
        self.identity, self.roles = identity, roles

    async def _apply_session(self, session) -> None:
        user = getattr(session, "user", None) if session else None

        if user is None:
            await self._clear()
            return

        identity = SessionIdentity(user_id=str(user.id), email=user.email)
        roles = effective_roles(await self.resolver.get_user_roles(identity.user_id))

        # Compared after the role await so overlapping applies of one sign-in notify once
        previous = self.user_id
        self._set(identity, roles)
        self.error = None

        logger.info(f"Session authenticated: {identity.email} roles={[r.name for r in roles]}")
        if previous != identity.user_id:
            await self._notify(SIGNED_IN)

    async def _clear(self) -> None:
        was_authenticated = self.authenticated
        self._set(None, [])
        if was_authenticated:
            logger.info("Session cleared")
            await self._notify(SIGNED_OUT)

    async def initialize(self) -> None:
        """Ask the provider for an existing session and resolve its roles."""
        logger.info("Initializing session...")
        self.loading = True
        try:
            try:
                session = await self.client.auth.get_session()
            except Exception as e:
                self.error = extract_supabase_error(e)
                logger.error(f"Session lookup failed: {self.error}")
                await self._clear()
                return

            await self._apply_session(session)
        finally:
            self.loading = False

    async def on_auth_state_changed(self, event: str, session) -> None:
        logger.info(f"Auth state change: {event} (has_user={bool(session and getattr(session, 'user', None))})")
        await self._apply_session(session)
        self.loading = False

    # ============================================================
    # Provider subscription
    # ============================================================
    def _on_provider_event(self, event, session):
        # The provider calls back synchronously; role resolution must be awaited.
        task = asyncio.get_running_loop().create_task(
            self.on_auth_state_changed(str(event), session)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def attach(self) -> None:
        if self._subscription is None:
            self._subscription = self.client.auth.on_auth_state_change(self._on_provider_event)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._pending):
            task.cancel()

    # ============================================================
    # Provider delegates
    # ============================================================
    async def sign_in(self, email: str, password: str) -> SessionRead:
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
            raise NotAuthenticatedError("Invalid email or password", cause=e)

        if not response.session:
            raise NotAuthenticatedError("Invalid email or password")

        await self._apply_session(response.session)
        self.loading = False
        return self.snapshot()

    async def sign_up(self, email: str, password: str) -> SessionRead:
        try:
            response = await self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Sign up failed for {email}: {detail}")
            raise RemoteWriteError(f"Sign up failed: {detail}", cause=e)

        # No session until the email is confirmed (project setting)
        if response.session:
            await self._apply_session(response.session)
        return self.snapshot()

    async def oauth_url(self, provider: str, redirect_to: Optional[str] = None) -> str:
        credentials = {"provider": provider}
        if redirect_to:
            credentials["options"] = {"redirect_to": redirect_to}

        try:
            response = await self.client.auth.sign_in_with_oauth(credentials)
        except Exception as e:
            detail = extract_supabase_error(e)
            raise RemoteWriteError(f"OAuth sign-in failed: {detail}", cause=e)
        return response.url

    async def sign_out(self) -> None:
        """
        Global sign-out. Local tokens, caches, identity and roles are
        cleared even when the provider call fails; the failure is then
        re-raised.
        """
        logger.info("Starting sign out process...")
        remote_error = None

        try:
            await self.client.auth.sign_out({"scope": "global"})
        except Exception as e:
            remote_error = e
            logger.error(f"Supabase sign out error: {extract_supabase_error(e)}")
        finally:
            self.storage.clear()
            self.loading = False

        await self._clear()

        if remote_error is not None:
            raise RemoteWriteError(
                f"Sign out failed: {extract_supabase_error(remote_error)}",
                cause=remote_error,
            )
        logger.info("Sign out successful")
