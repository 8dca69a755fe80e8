# services/users.py

from typing import List

from supabase import AsyncClient

from core.errors import (
    RecordNotFoundError,
    RemoteQueryError,
    RemoteWriteError,
    extract_supabase_error,
)
from core.logging_config import logger
from models.role import Role, UserRoleAssignment
from models.user import UserRead


class UserAdminService:
    """
    Account + role administration. Needs the service-role client because
    it calls auth.admin and writes other users' role assignments.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    async def list_roles(self) -> List[Role]:
        try:
            result = await self.client.table("roles").select("*").order("name").execute()
        except Exception as e:
            detail = extract_supabase_error(e)
            raise RemoteQueryError(f"Failed to fetch roles: {detail}", cause=e)

        return [
            Role(
                id=str(row["id"]),
                name=row["name"],
                description=row.get("description"),
                permissions=row.get("permissions") or {},
            )
            for row in result.data or []
        ]

    async def _role_id(self, role_name: str) -> str:
        try:
            result = await (
                self.client.table("roles")
                .select("id")
                .eq("name", role_name)
                .execute()
            )
        except Exception as e:
            detail = extract_supabase_error(e)
            raise RemoteQueryError(f"Role lookup failed: {detail}", cause=e)

        if not result.data:
            raise RecordNotFoundError(f"Role '{role_name}' does not exist")
        return str(result.data[0]["id"])

    async def _assign(self, user_id: str, role_id: str) -> None:
        try:
            row = UserRoleAssignment(user_id=user_id, role_id=role_id).model_dump()
            await self.client.table("user_roles").insert(row).execute()
        except Exception as e:
            detail = extract_supabase_error(e)
            raise RemoteWriteError(f"Failed to assign role: {detail}", cause=e)

    async def create_user(self, email: str, password: str, role_name: str) -> UserRead:
        # Unknown role fails before any account is created
        role_id = await self._role_id(role_name)

        try:
            response = await self.client.auth.admin.create_user(
                {"email": email, "password": password, "email_confirm": True}
            )
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Failed to create user {email}: {detail}")
            raise RemoteWriteError(f"Failed to create user: {detail}", cause=e)

        user = response.user
        await self._assign(str(user.id), role_id)

        logger.info(f"Created user {email} with role {role_name}")
        return UserRead(id=str(user.id), email=user.email or email, role=role_name)

    async def _assigned_role_ids(self, user_id: str) -> List[str]:
        try:
            result = await (
                self.client.table("user_roles")
                .select("role_id")
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            detail = extract_supabase_error(e)
            raise RemoteQueryError(f"Failed to fetch assigned roles: {detail}", cause=e)

        return [str(row["role_id"]) for row in result.data or []]

    async def update_user_role(self, user_id: str, role_name: str) -> None:
        """
        Replace the user's roles with ``role_name``. The new assignment is
        written before the others are removed; a user is never left roleless.
        """
        role_id = await self._role_id(role_name)
        current = await self._assigned_role_ids(user_id)

        if role_id not in current:
            await self._assign(user_id, role_id)

        if any(other != role_id for other in current):
            try:
                await (
                    self.client.table("user_roles")
                    .delete()
                    .eq("user_id", user_id)
                    .neq("role_id", role_id)
                    .execute()
                )
            except Exception as e:
                detail = extract_supabase_error(e)
                raise RemoteWriteError(f"Failed to clear previous roles: {detail}", cause=e)

        logger.info(f"User {user_id} role set to {role_name}")
