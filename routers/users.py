# routers/users.py

from fastapi import APIRouter, Depends

from dependencies.auth import get_user_admin, requires_super_admin
from models.user import UserCreate, UserRead, UserRoleUpdate
from services.users import UserAdminService


router = APIRouter(
    prefix="/users",
    tags=["User Management"],
    dependencies=[Depends(requires_super_admin())],
)


@router.get("/roles", summary="List assignable roles")
async def list_roles(service: UserAdminService = Depends(get_user_admin)):
    return {"success": True, "data": await service.list_roles()}


@router.post("", response_model=UserRead, status_code=201, summary="Create user with role")
async def create_user(payload: UserCreate, service: UserAdminService = Depends(get_user_admin)):
    return await service.create_user(payload.email, payload.password, payload.role)


@router.put("/{user_id}/role", summary="Replace a user's role")
async def update_user_role(user_id: str, payload: UserRoleUpdate, service: UserAdminService = Depends(get_user_admin)):
    await service.update_user_role(user_id, payload.role)
    return {"success": True, "user_id": user_id, "role": payload.role}
