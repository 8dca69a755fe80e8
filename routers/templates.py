# routers/templates.py

from fastapi import APIRouter, Depends

from core.permissions import COMMUNICATIONS
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission
from models.message_template import MessageTemplateCreate, MessageTemplateRead


# Templates are gated by the permission map only (no Admin/superAdmin check)
router = APIRouter(
    prefix="/templates",
    tags=["Communications"],
    dependencies=[Depends(requires_permission(COMMUNICATIONS))],
)


@router.get("", summary="List message templates")
async def list_templates(state: ChurchState = Depends(get_church_state)):
    return {"success": True, "data": state.templates}


@router.post("", response_model=MessageTemplateRead, status_code=201, summary="Save message template")
async def create_template(payload: MessageTemplateCreate, state: ChurchState = Depends(get_church_state)):
    return await state.add_template(payload)


@router.delete("/{template_id}", summary="Delete message template")
async def delete_template(template_id: str, state: ChurchState = Depends(get_church_state)):
    await state.delete_template(template_id)
    return {"success": True, "deleted_id": template_id}
