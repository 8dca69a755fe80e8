# routers/members.py

from fastapi import APIRouter, Depends

from core.permissions import MEMBERS
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission, requires_write_role
from models.member import MemberCreate, MemberRead, MemberUpdate


router = APIRouter(
    prefix="/members",
    tags=["Members"],
)

# Mutations pass both gates: the permission map AND the Admin/superAdmin role
WRITE_GATES = [Depends(requires_permission(MEMBERS)), Depends(requires_write_role())]


# ============================================================
# LIST MEMBERS
# ============================================================
@router.get(
    "",
    summary="List Members",
    description="Loaded member directory, newest first. **Permissions:** `members`.",
    dependencies=[Depends(requires_permission(MEMBERS))],
)
async def list_members(state: ChurchState = Depends(get_church_state)):
    return {"success": True, "data": state.members}


# ============================================================
# CREATE MEMBER
# ============================================================
@router.post(
    "",
    response_model=MemberRead,
    status_code=201,
    summary="Create Member",
    dependencies=WRITE_GATES,
)
async def create_member(payload: MemberCreate, state: ChurchState = Depends(get_church_state)):
    return await state.add_member(payload)


# ============================================================
# UPDATE MEMBER (partial)
# ============================================================
@router.put(
    "/{member_id}",
    response_model=MemberRead,
    summary="Update Member",
    dependencies=WRITE_GATES,
)
async def update_member(member_id: str, payload: MemberUpdate, state: ChurchState = Depends(get_church_state)):
    return await state.update_member(member_id, payload)


# ============================================================
# DELETE MEMBER
# ============================================================
@router.delete(
    "/{member_id}",
    summary="Delete Member",
    dependencies=WRITE_GATES,
)
async def delete_member(member_id: str, state: ChurchState = Depends(get_church_state)):
    await state.delete_member(member_id)
    return {"success": True, "deleted_id": member_id}
