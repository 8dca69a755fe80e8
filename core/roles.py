# core/roles.py

import asyncio
from typing import List, Optional

from pydantic import ValidationError
from supabase import AsyncClient

from core.config import settings
from core.errors import extract_supabase_error
from core.logging_config import logger
from core.permission_helpers import has_permission
from core.permissions import default_role
from models.role import Role


ROLE_JOIN_SELECT = "role_id, roles (id, name, description, permissions)"


def _role_from_join(joined) -> Optional[Role]:
    # PostgREST returns the many-to-one side as an object (or a list on some schemas)
    if isinstance(joined, list):
        joined = joined[0] if joined else None
    if not joined:
        return None

    try:
        return Role(
            id=str(joined["id"]),
            name=joined["name"],
            description=joined.get("description"),
            permissions=joined.get("permissions") or {},
        )
    except (KeyError, ValidationError) as e:
        logger.warning(f"Skipping malformed role row {joined!r}: {e}")
        return None


def effective_roles(roles: List[Role]) -> List[Role]:
    """A user with zero assignments still gets the default view-only role."""
    return roles if roles else [default_role()]


class RoleResolver:
    """
    Maps a user id to the roles assigned through `user_roles`.

    Lookups are bounded by ``timeout`` seconds. A timeout or any query
    error resolves to an empty list, never an exception, so a flaky role
    lookup cannot lock a user out.
    """

    def __init__(self, client: AsyncClient, timeout: Optional[float] = None):
        self.client = client
        self.timeout = settings.ROLE_LOOKUP_TIMEOUT_SECONDS if timeout is None else timeout

    async def _query_roles(self, user_id: str) -> List[Role]:
        result = await (
            self.client.table("user_roles")
            .select(ROLE_JOIN_SELECT)
            .eq("user_id", user_id)
            .execute()
        )

        roles = []
        for item in result.data or []:
            role = _role_from_join(item.get("roles"))
            if role is not None:
                roles.append(role)
        return roles

    async def get_user_roles(self, user_id: str) -> List[Role]:
        logger.info(f"Resolving roles for user {user_id}")

        try:
            roles = await asyncio.wait_for(self._query_roles(user_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Role lookup for {user_id} timed out after {self.timeout}s")
            return []
        except Exception as e:
            logger.error(f"Role lookup for {user_id} failed: {extract_supabase_error(e)}")
            return []

        logger.info(f"Roles for {user_id}: {[r.name for r in roles]}")
        return roles

    async def has_permission(self, user_id: str, permission: str) -> bool:
        """Standalone check for callers without a live session."""
        roles = await self.get_user_roles(user_id)
        return has_permission(roles, permission)
