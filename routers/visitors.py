# routers/visitors.py

from typing import Optional

from fastapi import APIRouter, Depends

from core.permissions import VISITORS
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission, requires_write_role
from models.enums import FollowUpStatus
from models.visitor import FollowUpUpdate, VisitorCreate, VisitorRead


router = APIRouter(
    prefix="/visitors",
    tags=["Visitors"],
)

WRITE_GATES = [Depends(requires_permission(VISITORS)), Depends(requires_write_role())]


@router.get(
    "",
    summary="List visitors",
    dependencies=[Depends(requires_permission(VISITORS))],
)
async def list_visitors(
    follow_up_status: Optional[FollowUpStatus] = None,
    state: ChurchState = Depends(get_church_state),
):
    visitors = state.visitors
    if follow_up_status:
        visitors = [v for v in visitors if v.follow_up_status == follow_up_status]
    return {"success": True, "data": visitors}


@router.post(
    "",
    response_model=VisitorRead,
    status_code=201,
    summary="Register visitor",
    dependencies=WRITE_GATES,
)
async def create_visitor(payload: VisitorCreate, state: ChurchState = Depends(get_church_state)):
    return await state.add_visitor(payload)


@router.patch(
    "/{visitor_id}/follow-up",
    response_model=VisitorRead,
    summary="Update follow-up status",
    dependencies=WRITE_GATES,
)
async def update_follow_up(visitor_id: str, payload: FollowUpUpdate, state: ChurchState = Depends(get_church_state)):
    return await state.update_follow_up(visitor_id, payload.follow_up_status)
